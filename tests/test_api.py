"""API tests for tee-sheet configuration, resolution and holds."""

import json
from unittest.mock import patch

import pytest

from teesheet.config import settings
from teesheet.models import TeeTimes, Timeframes


@pytest.fixture
def sheet_url(tee_sheet):
    return f"/api/v1/tee-sheets/{tee_sheet.id}"


def _create_template(client, sheet_url, **extra):
    body = {"name": "Weekday", "color": "#2E7D32", "is_default": True, **extra}
    response = client.post(f"{sheet_url}/templates/", json=body)
    assert response.status_code == 201
    return response.json()


def _put_bands(client, url, *pairs):
    return client.put(url, json={
        "timeframes": [{"start_time_local": s, "end_time_local": e} for s, e in pairs]
    })


def test_health(client, fake_redis, monkeypatch):
    monkeypatch.setattr("teesheet.main.redis_client", fake_redis)
    assert client.get("/health").json() == {"redis": True}


# ── Templates / seasons / overrides ──────────────────────────────────────


def test_template_crud(client, sheet_url):
    created = _create_template(client, sheet_url)
    assert created["name"] == "Weekday"
    assert created["is_default"] is True
    assert created["interval_mins"] == 10

    untitled = client.post(f"{sheet_url}/templates/", json={"is_default": True}).json()
    assert untitled["name"] == "Untitled Template"
    assert client.get(f"{sheet_url}/templates/{created['id']}").json()["is_default"] is False

    response = client.put(f"{sheet_url}/templates/{created['id']}", json={"color": None, "name": "Weekend"})
    assert response.json()["name"] == "Weekend"
    assert response.json()["color"] is None

    assert client.delete(f"{sheet_url}/templates/{created['id']}").status_code == 204
    assert client.get(f"{sheet_url}/templates/{created['id']}").status_code == 404
    assert len(client.get(f"{sheet_url}/templates/").json()) == 1


def test_template_color_length_is_limited(client, sheet_url):
    response = client.post(f"{sheet_url}/templates/", json={"color": "x" * 17})
    assert response.status_code == 422


def test_unknown_tee_sheet_is_404(client):
    assert client.get("/api/v1/tee-sheets/999/templates/").status_code == 404
    assert client.get("/api/v1/tee-sheets/999/seasons/").status_code == 404


def test_season_crud_and_range_validation(client, sheet_url):
    bad = client.post(f"{sheet_url}/seasons/", json={
        "start_date": "2025-09-01", "end_date_exclusive": "2025-06-01",
    })
    assert bad.status_code == 422

    created = client.post(f"{sheet_url}/seasons/", json={
        "start_date": "2025-06-01", "end_date_exclusive": "2025-09-01", "color": "#FFC107",
    })
    assert created.status_code == 201
    season = created.json()
    assert season["name"] == "Untitled Season"

    response = client.put(f"{sheet_url}/seasons/{season['id']}", json={"end_date_exclusive": "2025-05-01"})
    assert response.status_code == 400

    response = client.put(f"{sheet_url}/seasons/{season['id']}", json={"name": "Summer"})
    assert response.json()["name"] == "Summer"
    assert response.json()["end_date_exclusive"] == "2025-09-01"

    assert client.delete(f"{sheet_url}/seasons/{season['id']}").status_code == 204


def test_overlapping_seasons_are_logged(client, sheet_url, caplog):
    client.post(f"{sheet_url}/seasons/", json={"start_date": "2025-06-01", "end_date_exclusive": "2025-09-01"})
    client.post(f"{sheet_url}/seasons/", json={"start_date": "2025-08-01", "end_date_exclusive": "2025-10-01"})

    assert "overlaps season(s)" in caplog.text


def test_one_override_per_date(client, sheet_url):
    first = client.post(f"{sheet_url}/overrides/", json={"date": "2025-07-04", "name": "Holiday"})
    assert first.status_code == 201

    again = client.post(f"{sheet_url}/overrides/", json={"date": "2025-07-04"})
    assert again.status_code == 409

    override_id = first.json()["id"]
    assert client.put(f"{sheet_url}/overrides/{override_id}", json={"color": "#D32F2F"}).json()["color"] == "#D32F2F"
    assert client.delete(f"{sheet_url}/overrides/{override_id}").status_code == 204
    assert client.post(f"{sheet_url}/overrides/", json={"date": "2025-07-04"}).status_code == 201


# ── Timeframes ───────────────────────────────────────────────────────────


def test_replace_timeframes_and_reject_overlap(client, sheet_url, fake_redis):
    template = _create_template(client, sheet_url)
    url = f"{sheet_url}/templates/{template['id']}/timeframes"

    response = _put_bands(client, url, ("07:00", "08:00"), ("09:00", "11:00"))
    assert response.status_code == 200
    assert [(tf["start_time_local"], tf["end_time_local"]) for tf in response.json()] == [
        ("07:00", "08:00"), ("09:00", "11:00"),
    ]
    event = json.loads(fake_redis.lists["events:p2p"][-1])
    assert event["type"] == "timeframes_updated"

    rejected = _put_bands(client, url, ("07:00", "08:00"), ("07:30", "08:30"))
    assert rejected.status_code == 400
    assert rejected.json()["detail"]["errors"] == ["Overlaps 07:00–08:00"]

    # stored set is untouched by the rejected save
    assert len(client.get(url).json()) == 2


def test_replace_timeframes_reports_malformed_rows(client, sheet_url):
    template = _create_template(client, sheet_url)
    url = f"{sheet_url}/templates/{template['id']}/timeframes"

    response = _put_bands(client, url, ("07:00", "08:00"), ("25:00", "26:00"), ("10:00", "09:00"))

    assert response.status_code == 400
    errors = response.json()["detail"]["errors"]
    assert errors[0].startswith("Timeframe 2: Invalid time '25:00'")
    assert errors[1] == "Timeframe 3: End 09:00 must be after start 10:00"


def test_timeframes_of_another_sheets_owner_are_404(client, sheet_url):
    assert client.get(f"{sheet_url}/seasons/12345/timeframes").status_code == 404
    assert client.get(f"{sheet_url}/courses/1/timeframes").status_code == 422


def test_validate_step_matches_editor(client, sheet_url):
    template = _create_template(client, sheet_url)
    url = f"{sheet_url}/templates/{template['id']}/timeframes/validate"
    existing = [
        {"start_time_local": "07:00", "end_time_local": "08:00"},
        {"start_time_local": "09:00", "end_time_local": "11:00"},
    ]

    ok = client.post(url, json={"timeframes": existing, "start": "08:00", "end": "09:00"})
    assert ok.json() == {"valid": True, "errors": []}

    clash = client.post(url, json={"timeframes": existing, "start": "07:30", "end": "08:30"})
    assert clash.json()["valid"] is False
    assert "Overlaps 07:00–08:00" in clash.json()["errors"][0]

    in_place = client.post(url, json={"timeframes": existing, "edit_index": 0, "start": "06:30", "end": "08:00"})
    assert in_place.json()["valid"] is True

    bad_index = client.post(url, json={"timeframes": existing, "edit_index": 7, "start": "06:30", "end": "08:00"})
    assert bad_index.status_code == 400

    negative = client.post(url, json={"timeframes": existing, "edit_index": -1, "start": "09:00", "end": "11:00"})
    assert negative.status_code == 422

    last = client.post(url, json={"timeframes": existing, "edit_index": 1, "start": "09:00", "end": "11:00"})
    assert last.json() == {"valid": True, "errors": []}


# ── Resolution / generation ──────────────────────────────────────────────


def test_effective_timeframes_follow_override_season_template(client, sheet_url):
    template = _create_template(client, sheet_url)
    _put_bands(client, f"{sheet_url}/templates/{template['id']}/timeframes", ("07:00", "08:00"))

    season = client.post(f"{sheet_url}/seasons/", json={
        "name": "Summer", "start_date": "2025-06-01", "end_date_exclusive": "2025-09-01", "color": "#FFC107",
    }).json()
    _put_bands(client, f"{sheet_url}/seasons/{season['id']}/timeframes", ("06:00", "12:00"))

    override = client.post(f"{sheet_url}/overrides/", json={"date": "2025-07-04"}).json()

    # override without bands keeps the season's bands and color
    body = client.get(f"{sheet_url}/effective", params={"date": "2025-07-04"}).json()
    assert body["source"] == "season"
    assert body["color"] == "#FFC107"
    assert body["timeframes"] == [{"start": "06:00", "end": "12:00"}]

    _put_bands(client, f"{sheet_url}/overrides/{override['id']}/timeframes", ("08:00", "10:00"))
    body = client.get(f"{sheet_url}/effective", params={"date": "2025-07-04"}).json()
    assert body["source"] == "override"
    assert body["timeframes"] == [{"start": "08:00", "end": "10:00"}]

    body = client.get(f"{sheet_url}/effective", params={"date": "2025-10-01"}).json()
    assert body["source"] == "template"
    assert body["color"] == "#2E7D32"
    assert body["warnings"] == []


def test_internal_generate_is_gated(client, tee_sheet, monkeypatch):
    params = {"tee_sheet_id": tee_sheet.id, "date": "2025-08-15"}
    assert client.post("/api/v1/internal/generate", params=params).status_code == 404

    monkeypatch.setattr(settings, "enable_internal_endpoints", True)
    assert client.post("/api/v1/internal/generate", params=params).status_code == 403


def test_generate_then_check_clean(client, sheet_url, tee_sheet, db_session, monkeypatch):
    template = _create_template(client, sheet_url)
    _put_bands(client, f"{sheet_url}/templates/{template['id']}/timeframes", ("07:00", "08:00"))
    monkeypatch.setattr(settings, "enable_internal_endpoints", True)

    with patch("teesheet.routers.internal.LOCAL_HOSTS", ("testclient",)):
        response = client.post(
            "/api/v1/internal/generate",
            params={"tee_sheet_id": tee_sheet.id, "date": "2025-08-15"},
        )
    assert response.status_code == 200
    assert response.json() == {"generated": 6, "source": "template", "date": "2025-08-15"}

    check = client.get("/api/v1/tee-sheets/check-clean", params={"tee_sheet_id": tee_sheet.id, "date": "2025-08-15"})
    assert check.json() == {"clean": True, "date": "2025-08-15"}

    db_session.query(TeeTimes).first().assigned_count = 1
    db_session.commit()
    check = client.get("/api/v1/tee-sheets/check-clean", params={"tee_sheet_id": tee_sheet.id, "date": "2025-08-15"})
    assert check.json()["clean"] is False


# ── Holds ────────────────────────────────────────────────────────────────


@pytest.fixture
def tee_time(db_session, tee_sheet):
    row = TeeTimes(tee_sheet_id=tee_sheet.id, start_time="2025-08-15 07:00", capacity=4, assigned_count=1, is_blocked=0)
    db_session.add(row)
    db_session.commit()
    return row


def test_cart_hold_lifecycle(client, tee_time, fake_redis):
    body = {"user_id": 42, "items": [{"tee_time_id": tee_time.id, "party_size": 3}]}

    created = client.post("/api/v1/holds/cart", json=body)
    assert created.status_code == 200
    assert created.json()["expires_in_seconds"] == 300
    assert 299 <= created.json()["hold"]["remaining_seconds"] <= 300

    current = client.get("/api/v1/holds/cart/42").json()
    assert current["items"] == body["items"]
    assert current["source"] == "checkout"

    assert client.delete("/api/v1/holds/cart/42").status_code == 204
    assert client.get("/api/v1/holds/cart/42").status_code == 404
    types = [json.loads(e)["type"] for e in fake_redis.lists["events:p2p"]]
    assert types == ["hold_created", "hold_released"]


def test_cart_hold_capacity_and_unknown_tee_time(client, tee_time):
    too_many = {"user_id": 42, "items": [{"tee_time_id": tee_time.id, "party_size": 4}]}
    assert client.post("/api/v1/holds/cart", json=too_many).status_code == 409

    unknown = {"user_id": 42, "items": [{"tee_time_id": 999, "party_size": 1}]}
    assert client.post("/api/v1/holds/cart", json=unknown).status_code == 404

    oversized = {"user_id": 42, "items": [{"tee_time_id": tee_time.id, "party_size": 5}]}
    assert client.post("/api/v1/holds/cart", json=oversized).status_code == 422


def test_waitlist_hold_blocks_checkout(client, tee_time):
    item = [{"tee_time_id": tee_time.id, "party_size": 1}]
    client.post("/api/v1/holds/cart", json={"user_id": 7, "items": item, "source": "waitlist"})

    response = client.post("/api/v1/holds/cart", json={"user_id": 7, "items": item})

    assert response.status_code == 409
    assert response.json()["detail"] == "Waitlist hold in progress"


# ── Season weekday windows ───────────────────────────────────────────────


def test_season_weekday_windows_and_prevalidation(client, sheet_url):
    season = client.post(f"{sheet_url}/seasons/", json={
        "start_date": "2025-08-11", "end_date_exclusive": "2025-08-18", "interval_mins": 15,
    }).json()
    url = f"{sheet_url}/seasons/{season['id']}/timeframes"
    assert season["interval_mins"] == 15

    _put_bands(client, url, ("06:00", "12:00"))
    friday = client.put(url, params={"weekday": 5}, json={
        "timeframes": [{"start_time_local": "07:00", "end_time_local": "09:00"}],
    })
    assert friday.status_code == 200
    assert [tf["weekday"] for tf in friday.json()] == [5]

    # base set untouched by the weekday save
    assert [tf["start_time_local"] for tf in client.get(url).json()] == ["06:00"]

    body = client.get(f"{sheet_url}/effective", params={"date": "2025-08-15"}).json()
    assert body["timeframes"] == [{"start": "07:00", "end": "09:00"}]
    assert body["interval_mins"] == 15
    body = client.get(f"{sheet_url}/effective", params={"date": "2025-08-16"}).json()
    assert body["timeframes"] == [{"start": "06:00", "end": "12:00"}]

    report = client.get(f"{sheet_url}/seasons/{season['id']}/prevalidate").json()
    assert report == {"ok": True, "violations": []}


def test_prevalidation_reports_stored_conflicts(client, sheet_url, db_session):
    season = client.post(f"{sheet_url}/seasons/", json={
        "start_date": "2025-08-11", "end_date_exclusive": "2025-08-18",
    }).json()
    # legacy rows written around the API's overlap gate
    db_session.add_all([
        Timeframes(season_id=season["id"], weekday=2, position=0, start_time_local="07:00", end_time_local="08:00"),
        Timeframes(season_id=season["id"], weekday=2, position=1, start_time_local="07:30", end_time_local="08:30"),
    ])
    db_session.commit()

    report = client.get(f"{sheet_url}/seasons/{season['id']}/prevalidate").json()

    assert report["ok"] is False
    assert report["violations"] == [
        {"date": "2025-08-12", "weekday": 2, "code": "overlap", "message": "Overlaps 07:00–08:00"},
    ]


def test_weekday_windows_only_on_seasons(client, sheet_url):
    template = _create_template(client, sheet_url)
    url = f"{sheet_url}/templates/{template['id']}/timeframes"

    assert client.get(url, params={"weekday": 1}).status_code == 400
    assert _put_bands_on_weekday(client, url, 1).status_code == 400
    assert client.get(url, params={"weekday": 7}).status_code == 422


def _put_bands_on_weekday(client, url, weekday):
    return client.put(url, params={"weekday": weekday}, json={
        "timeframes": [{"start_time_local": "07:00", "end_time_local": "08:00"}],
    })
