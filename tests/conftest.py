"""
Pytest configuration and fixtures.

Environment is set before the app is imported so Settings() resolves
without a .env file. The database is in-memory SQLite; Redis is replaced
by a small in-memory double.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import WatchError
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from teesheet.database import get_db
from teesheet.main import app
from teesheet.models import Base, GolfCourseInstances, TeeSheets
from teesheet.routers.holds import get_hold_store
from teesheet.services.holds import HoldRedisStore


class InMemoryRedis:
    """The subset of redis-py used by the hold store and event emitter."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.lists: dict[str, list[str]] = {}
        # bumped on every write; WATCH compares these
        self.versions: dict[str, int] = {}

    def _touch(self, key):
        self.versions[key] = self.versions.get(key, 0) + 1

    # strings
    def setex(self, key, ttl, value):
        self.values[key] = value
        self._touch(key)
        return True

    def get(self, key):
        return self.values.get(key)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            for store in (self.values, self.zsets, self.lists):
                if key in store:
                    del store[key]
                    removed += 1
                    self._touch(key)
        return removed

    # sorted sets
    def zadd(self, key, mapping):
        zset = self.zsets.setdefault(key, {})
        added = len([m for m in mapping if m not in zset])
        zset.update({m: float(s) for m, s in mapping.items()})
        self._touch(key)
        return added

    def zrem(self, key, *members):
        zset = self.zsets.get(key, {})
        removed = 0
        for member in members:
            if member in zset:
                del zset[member]
                removed += 1
        if removed:
            self._touch(key)
        return removed

    def zscore(self, key, member):
        return self.zsets.get(key, {}).get(member)

    def zrangebyscore(self, key, low, high):
        low = float("-inf") if low == "-inf" else float(low)
        high = float("inf") if high == "+inf" else float(high)
        zset = self.zsets.get(key, {})
        return [m for m, s in sorted(zset.items(), key=lambda kv: kv[1]) if low <= s <= high]

    # lists
    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        self._touch(key)
        return len(self.lists[key])

    def ping(self):
        return True

    def pipeline(self):
        return _Pipeline(self)


class _Pipeline:
    """Buffered commands; after watch() commands run immediately until multi()."""

    def __init__(self, redis):
        self.redis = redis
        self.calls = []
        self.watched = None
        self.buffering = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.reset()

    def reset(self):
        self.calls = []
        self.watched = None
        self.buffering = True

    def watch(self, *keys):
        self.watched = {key: self.redis.versions.get(key, 0) for key in keys}
        self.buffering = False

    def unwatch(self):
        self.watched = None

    def multi(self):
        self.buffering = True

    def __getattr__(self, name):
        command = getattr(self.redis, name)
        if not self.buffering:
            return command

        def queue(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return queue

    def execute(self):
        watched, calls = self.watched, self.calls
        self.reset()
        if watched and any(self.redis.versions.get(k, 0) != v for k, v in watched.items()):
            raise WatchError("Watched variable changed.")
        return [getattr(self.redis, name)(*args, **kwargs) for name, args, kwargs in calls]


@pytest.fixture
def fake_redis(monkeypatch):
    redis = InMemoryRedis()
    monkeypatch.setattr("teesheet.services.events.redis_client", redis)
    return redis


@pytest.fixture
def hold_store(fake_redis):
    return HoldRedisStore(fake_redis)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_sqlite_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def tee_sheet(db_session):
    course = GolfCourseInstances(name="Pine Valley Test", timezone="UTC")
    sheet = TeeSheets(course=course, name="Main")
    db_session.add(course)
    db_session.commit()
    return sheet


@pytest.fixture
def client(db_session, hold_store):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hold_store] = lambda: hold_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
