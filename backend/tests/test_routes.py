import dataclasses

import pytest
from fastapi.testclient import TestClient

from conftest import FakeStorage, StaticSource, feed_entry, make_row
from pos_finder.core.config import get_settings
from pos_finder.core.deps import get_source, get_storage
from pos_finder.hours.errors import FeedUnavailable, StorageUnavailable
from pos_finder.main import app


@pytest.fixture
def state():
    return {"storage": FakeStorage(), "source": StaticSource()}


@pytest.fixture
def client(state, settings):
    app.dependency_overrides[get_storage] = lambda: state["storage"]
    app.dependency_overrides[get_source] = lambda: state["source"]
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/v1/health").json() == {"status": "ok"}


def test_list_open_points_of_sale(client, state):
    state["storage"] = FakeStorage(
        [
            make_row("A", open_="09:00", close="12:00"),
            make_row("B", open_="08:00", close="20:00", remarks="closed on holidays"),
            make_row("A", open_="11:00", close="13:00"),
        ]
    )

    r = client.get("/v1/points-of-sale", params={"day": "2", "time": "11:30"})

    assert r.status_code == 200
    body = r.json()
    assert body["code"] == 200
    assert list(body["data"]) == ["A", "B"]
    assert body["data"]["A"]["openingHours"] == [
        {"from": 1, "to": 5, "hours": "09:00-12:00"},
        {"from": 1, "to": 5, "hours": "11:00-13:00"},
    ]
    assert body["data"]["B"]["payMethods"] == 1
    assert body["data"]["B"]["remarks"] == "closed on holidays"


@pytest.mark.parametrize(
    "params",
    [{"day": "7"}, {"day": "monday"}, {"time": "25:00"}, {"time": "9:0"}, {"day": "1", "time": "noon"}],
)
def test_invalid_parameters_are_client_errors(client, state, params):
    r = client.get("/v1/points-of-sale", params=params)

    assert r.status_code == 400
    body = r.json()
    assert body["code"] == 400
    assert body["message"].startswith("Invalid parameter provided - ")
    assert state["storage"].calls == []


def test_storage_failure_is_a_server_error(client, state):
    state["storage"] = FakeStorage(fail_with=StorageUnavailable("connection refused"))

    r = client.get("/v1/points-of-sale", params={"day": "1", "time": "10:00"})

    assert r.status_code == 500
    assert r.json() == {"code": 500, "message": "Failed to load data from the database - connection refused"}


def test_update_reloads_from_feed(client, state):
    state["source"] = StaticSource(
        [feed_entry("PID-1"), feed_entry("PID-2", opening_hours=[{"from": 1, "to": 1, "hours": "bad"}])]
    )

    r = client.post("/v1/points-of-sale/update")

    assert r.status_code == 200
    body = r.json()
    assert body["code"] == 200
    assert body["stats"]["inserted"] == 1
    assert body["stats"]["skipped_ids"] == ["PID-2"]
    assert [row["id"] for row in state["storage"].tables["points_of_sale"]] == ["PID-1"]


def test_update_abort_policy_reports_parse_failure(client, state, settings):
    app.dependency_overrides[get_settings] = lambda: dataclasses.replace(settings, on_malformed="abort")
    state["source"] = StaticSource([feed_entry("PID-2", opening_hours=[{"from": 1, "to": 1, "hours": "bad"}])])

    r = client.post("/v1/points-of-sale/update")

    assert r.status_code == 500
    assert r.json()["message"].startswith("Failed to parse PID data - entry PID-2")
    assert state["storage"].rolled_back


def test_update_feed_failure(client, state):
    state["source"] = StaticSource(error=FeedUnavailable("HTTP 404"))

    r = client.post("/v1/points-of-sale/update")

    assert r.status_code == 500
    assert r.json() == {"code": 500, "message": "Failed to retrieve data from PID - HTTP 404"}
