from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from ewm.api import deps
from ewm.core.config import settings


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ids(resp) -> list[int]:
    assert resp.status_code == 200, resp.text
    return [e["id"] for e in resp.json()]


def test_only_published_events_are_public(client: TestClient, api):
    user = api.user()
    cat = api.category()
    draft = api.event(user["id"], cat["id"])
    published = api.published_event(user["id"], cat["id"])

    assert _ids(client.get("/events")) == [published["id"]]

    hidden = client.get(f"/events/{draft['id']}")
    assert hidden.status_code == 404
    assert hidden.json()["detail"]["code"] == "EVENT_NOT_FOUND"

    shown = client.get(f"/events/{published['id']}")
    assert shown.status_code == 200
    assert shown.json()["state"] == "PUBLISHED"


def test_public_filters(client: TestClient, api):
    user, guest = api.user(), api.user()
    music, sport = api.category(), api.category()
    jazz = api.published_event(
        user["id"],
        music["id"],
        annotation="Late night JAZZ session with a trio",
        paid=True,
        participantLimit=1,
        requestModeration=False,
    )
    run = api.published_event(
        user["id"],
        sport["id"],
        description="A friendly five kilometre run, jazz band at the finish line.",
        eventDate=api.future(days=3),
    )
    quiz = api.published_event(user["id"], music["id"], eventDate=api.future(days=5))

    assert _ids(client.get("/events", params={"text": "jazz"})) == [jazz["id"], run["id"]]
    assert _ids(client.get("/events", params={"categories": music["id"]})) == [
        jazz["id"],
        quiz["id"],
    ]
    assert _ids(client.get("/events", params={"paid": "true"})) == [jazz["id"]]
    assert _ids(client.get("/events", params={"paid": "false"})) == [run["id"], quiz["id"]]

    api.request(guest["id"], jazz["id"])
    assert _ids(client.get("/events", params={"onlyAvailable": "true"})) == [
        run["id"],
        quiz["id"],
    ]
    assert _ids(client.get("/events", params={"onlyAvailable": "false"})) == [
        jazz["id"],
        run["id"],
        quiz["id"],
    ]


def test_public_date_range(client: TestClient, api):
    user = api.user()
    cat = api.category()
    soon = api.published_event(user["id"], cat["id"], eventDate=api.future(days=1))
    later = api.published_event(user["id"], cat["id"], eventDate=api.future(days=8))

    assert _ids(client.get("/events", params={"rangeStart": api.future(days=2)})) == [later["id"]]
    assert _ids(client.get("/events", params={"rangeEnd": api.future(days=2)})) == [soon["id"]]

    past_start = (_now() - timedelta(days=30)).strftime("%Y-%m-%d %H:%M:%S")
    assert _ids(client.get("/events", params={"rangeStart": past_start})) == [
        soon["id"],
        later["id"],
    ]

    inverted = client.get(
        "/events",
        params={"rangeStart": api.future(days=5), "rangeEnd": api.future(days=2)},
    )
    assert inverted.status_code == 400
    assert inverted.json()["detail"]["code"] == "INVALID_DATETIME"

    garbage = client.get("/events", params={"rangeStart": "next week"})
    assert garbage.status_code == 400
    assert garbage.json()["detail"]["code"] == "INVALID_DATETIME"


def test_public_sort_and_paging(client: TestClient, api):
    user = api.user()
    cat = api.category()
    e3 = api.published_event(user["id"], cat["id"], eventDate=api.future(days=3))
    e1 = api.published_event(user["id"], cat["id"], eventDate=api.future(days=1))
    e2 = api.published_event(user["id"], cat["id"], eventDate=api.future(days=2))

    assert _ids(client.get("/events")) == [e1["id"], e2["id"], e3["id"]]
    assert _ids(client.get("/events", params={"sort": "EVENT_DATE", "from": 1, "size": 1})) == [
        e2["id"]
    ]

    for _ in range(2):
        client.get(f"/events/{e1['id']}")
    client.get(f"/events/{e3['id']}")

    by_views = client.get("/events", params={"sort": "VIEWS"})
    assert _ids(by_views) == [e2["id"], e3["id"], e1["id"]]
    assert [e["views"] for e in by_views.json()] == [0, 1, 2]

    paged = client.get("/events", params={"sort": "VIEWS", "from": 2, "size": 5})
    assert _ids(paged) == [e1["id"]]

    bad = client.get("/events", params={"sort": "POPULARITY"})
    assert bad.status_code == 400
    assert bad.json()["detail"]["code"] == "INVALID_SORT"


def test_views_count_public_detail_hits(client: TestClient, api, stats_client):
    user = api.user()
    cat = api.category()
    event = api.published_event(user["id"], cat["id"])

    first = client.get(f"/events/{event['id']}")
    assert first.json()["views"] == 0
    second = client.get(f"/events/{event['id']}")
    assert second.json()["views"] == 1

    listed = client.get("/events").json()
    assert listed[0]["views"] == 2

    owner_view = client.get(f"/users/{user['id']}/events/{event['id']}").json()
    assert owner_view["views"] == 2


def test_public_calls_record_hits(monkeypatch, client: TestClient, api, stats_client):
    monkeypatch.setattr(deps, "settings", replace(settings, trust_forwarded_for=True))
    user = api.user()
    cat = api.category()
    event = api.published_event(user["id"], cat["id"])

    client.get("/events")
    client.get(f"/events/{event['id']}")
    client.get(f"/events/{event['id']}", headers={"X-Forwarded-For": "10.0.0.7"})

    start = _now() - timedelta(hours=1)
    end = _now() + timedelta(hours=1)
    stats = {s.uri: s for s in stats_client.get_stats(start, end)}

    assert stats["/events"].hits == 1
    assert stats[f"/events/{event['id']}"].hits == 2
    assert stats["/events"].app == "ewm-main-service"

    unique = stats_client.get_stats(start, end, [f"/events/{event['id']}"], unique=True)
    assert [(s.uri, s.hits) for s in unique] == [(f"/events/{event['id']}", 2)]

    # Failed lookups are not recorded
    client.get("/events/999")
    stats = {s.uri: s for s in stats_client.get_stats(start, end)}
    assert "/events/999" not in stats
