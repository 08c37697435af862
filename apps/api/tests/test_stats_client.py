from __future__ import annotations

import json
from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from ewm.main import app
from ewm.stats_client import StatsClient, get_stats_client


def _client_with(handler) -> StatsClient:
    http = httpx.Client(base_url="http://stats.test", transport=httpx.MockTransport(handler))
    return StatsClient(http=http, app_name="ewm-test")


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_hit_failure_is_swallowed():
    stats = _client_with(_unreachable)
    assert stats.hit("/events/1", "127.0.0.1") is False


def test_views_degrade_to_empty_on_server_error():
    stats = _client_with(lambda request: httpx.Response(500, json={"detail": "boom"}))
    start = datetime(2024, 1, 1)

    assert stats.views_for(["/events/1"], start=start) == {}
    with pytest.raises(httpx.HTTPStatusError):
        stats.get_stats(start, start + timedelta(days=1), ["/events/1"])


def test_views_for_sends_one_batched_request():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"app": "ewm-test", "uri": "/events/2", "hits": 5},
                {"app": "ewm-test", "uri": "/events/1", "hits": 3},
            ],
        )

    stats = _client_with(handler)
    views = stats.views_for(
        ["/events/1", "/events/2", "/events/1"],
        start=datetime(2024, 1, 1, 10, 0, 0),
        end=datetime(2024, 1, 2, 10, 0, 0),
        unique=True,
    )

    assert views == {"/events/1": 3, "/events/2": 5}
    assert len(seen) == 1
    params = seen[0].url.params
    assert params.get_list("uris") == ["/events/1", "/events/2"]
    assert params["start"] == "2024-01-01 10:00:00"
    assert params["end"] == "2024-01-02 10:00:00"
    assert params["unique"] == "true"


def test_views_for_without_uris_makes_no_call():
    stats = _client_with(_unreachable)
    assert stats.views_for([], start=datetime(2024, 1, 1)) == {}


def test_hit_payload():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.read())
        return httpx.Response(201, json={})

    stats = _client_with(handler)
    assert stats.hit("/events", "10.0.0.1", datetime(2024, 5, 1, 12, 30, 0)) is True
    assert captured["path"] == "/hit"
    assert captured["body"] == {
        "app": "ewm-test",
        "uri": "/events",
        "ip": "10.0.0.1",
        "timestamp": "2024-05-01 12:30:00",
    }


def test_api_keeps_working_when_stats_is_down(api, stats_client):
    user = api.user()
    cat = api.category()
    event = api.published_event(user["id"], cat["id"])

    app.dependency_overrides[get_stats_client] = lambda: _client_with(_unreachable)
    client = TestClient(app)

    listed = client.get("/events")
    assert listed.status_code == 200
    assert listed.json()[0]["views"] == 0

    detail = client.get(f"/events/{event['id']}")
    assert detail.status_code == 200
    assert detail.json()["views"] == 0

    comments = client.get(f"/comments/{event['id']}")
    assert comments.status_code == 200
