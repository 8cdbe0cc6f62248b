import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .redis_client import redis_client
from .routers import holds, internal, overrides, seasons, tee_sheets, templates, timeframes
from .services.holds.sweeper import hold_sweeper_loop

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = asyncio.create_task(hold_sweeper_loop())
    try:
        yield
    finally:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


app = FastAPI(title="Tee Sheet API", lifespan=lifespan)

app.include_router(tee_sheets.router, prefix=API_PREFIX)
app.include_router(templates.router, prefix=API_PREFIX)
app.include_router(seasons.router, prefix=API_PREFIX)
app.include_router(overrides.router, prefix=API_PREFIX)
app.include_router(timeframes.router, prefix=API_PREFIX)
app.include_router(holds.router, prefix=API_PREFIX)
app.include_router(internal.router, prefix=API_PREFIX)


@app.get("/health")
def health():
    try:
        return {"redis": bool(redis_client.ping())}
    except Exception:
        logger.exception("Redis health check failed")
        return {"redis": False}
