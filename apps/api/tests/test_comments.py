from __future__ import annotations

from fastapi.testclient import TestClient


def _comment(client: TestClient, user_id: int, event_id: int, text: str):
    return client.post(
        f"/users/{user_id}/comments", params={"eventId": event_id}, json={"text": text}
    )


def test_comment_requires_published_event(client: TestClient, api):
    owner, reader = api.user(), api.user("Reader")
    cat = api.category()
    draft = api.event(owner["id"], cat["id"])
    event = api.published_event(owner["id"], cat["id"])

    rejected = _comment(client, reader["id"], draft["id"], "Can't wait!")
    assert rejected.status_code == 409
    assert rejected.json()["detail"]["code"] == "EVENT_NOT_PUBLISHED"

    created = _comment(client, reader["id"], event["id"], "Can't wait!")
    assert created.status_code == 201
    body = created.json()
    assert body["text"] == "Can't wait!"
    assert body["authorName"] == "Reader"
    assert body["eventId"] == event["id"]
    assert body["likes"] == 0
    assert body["edited"] is None

    assert _comment(client, 999, event["id"], "ghost").status_code == 404
    assert _comment(client, reader["id"], 999, "nowhere").status_code == 404
    assert _comment(client, reader["id"], event["id"], "   ").status_code == 400


def test_edit_and_delete_own_comment(client: TestClient, api):
    owner, author, other = api.user(), api.user(), api.user()
    cat = api.category()
    event = api.published_event(owner["id"], cat["id"])
    other_event = api.published_event(owner["id"], cat["id"])
    comment = _comment(client, author["id"], event["id"], "First!").json()
    url = f"/users/{author['id']}/comments/{comment['id']}"

    edited = client.patch(url, params={"eventId": event["id"]}, json={"text": "Second thoughts"})
    assert edited.status_code == 200
    assert edited.json()["text"] == "Second thoughts"
    assert edited.json()["edited"] is not None

    foreign = client.patch(
        f"/users/{other['id']}/comments/{comment['id']}",
        params={"eventId": event["id"]},
        json={"text": "Not mine"},
    )
    assert foreign.status_code == 400
    assert foreign.json()["detail"]["code"] == "COMMENT_NOT_OWNED"

    wrong_event = client.patch(url, params={"eventId": other_event["id"]}, json={"text": "Moved"})
    assert wrong_event.status_code == 404

    assert client.delete(url, params={"eventId": event["id"]}).status_code == 204
    assert client.delete(url, params={"eventId": event["id"]}).status_code == 404


def test_likes(client: TestClient, api):
    owner, author, fan = api.user(), api.user(), api.user()
    cat = api.category()
    event = api.published_event(owner["id"], cat["id"])
    comment = _comment(client, author["id"], event["id"], "Great lineup").json()

    own = client.put(f"/users/{author['id']}/comments/{comment['id']}/like")
    assert own.status_code == 409
    assert own.json()["detail"]["code"] == "COMMENT_OWN_LIKE"

    liked = client.put(f"/users/{fan['id']}/comments/{comment['id']}/like")
    assert liked.status_code == 200
    assert liked.json()["likes"] == 1

    twice = client.put(f"/users/{fan['id']}/comments/{comment['id']}/like")
    assert twice.status_code == 409
    assert twice.json()["detail"]["code"] == "COMMENT_ALREADY_LIKED"

    assert client.delete(f"/users/{fan['id']}/comments/{comment['id']}/like").status_code == 204
    missing = client.delete(f"/users/{fan['id']}/comments/{comment['id']}/like")
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "COMMENT_LIKE_NOT_FOUND"

    assert client.put(f"/users/{fan['id']}/comments/999/like").status_code == 404


def test_list_comments_sorting(client: TestClient, api):
    owner, a, b, c = api.user(), api.user(), api.user(), api.user()
    cat = api.category()
    event = api.published_event(owner["id"], cat["id"])
    draft = api.event(owner["id"], cat["id"])

    older = _comment(client, a["id"], event["id"], "older").json()
    newer = _comment(client, b["id"], event["id"], "newer").json()
    client.put(f"/users/{b['id']}/comments/{older['id']}/like")
    client.put(f"/users/{c['id']}/comments/{older['id']}/like")

    by_likes = client.get(f"/comments/{event['id']}", params={"sort": "LIKES"})
    assert by_likes.status_code == 200
    assert [(x["id"], x["likes"]) for x in by_likes.json()] == [
        (older["id"], 2),
        (newer["id"], 0),
    ]

    default = client.get(f"/comments/{event['id']}")
    assert [x["id"] for x in default.json()] == [older["id"], newer["id"]]

    by_date = client.get(f"/comments/{event['id']}", params={"sort": "date"})
    assert [x["id"] for x in by_date.json()] == [newer["id"], older["id"]]

    paged = client.get(f"/comments/{event['id']}", params={"sort": "DATE", "from": 1, "size": 1})
    assert [x["id"] for x in paged.json()] == [older["id"]]

    bad = client.get(f"/comments/{event['id']}", params={"sort": "RANDOM"})
    assert bad.status_code == 400
    assert bad.json()["detail"]["code"] == "INVALID_SORT"

    assert client.get(f"/comments/{draft['id']}").status_code == 404


def test_admin_removes_comment(client: TestClient, api):
    owner, author, fan = api.user(), api.user(), api.user()
    cat = api.category()
    event = api.published_event(owner["id"], cat["id"])
    comment = _comment(client, author["id"], event["id"], "Spam spam spam").json()
    client.put(f"/users/{fan['id']}/comments/{comment['id']}/like")

    assert client.delete(f"/admin/comments/{comment['id']}").status_code == 204
    assert client.delete(f"/admin/comments/{comment['id']}").status_code == 404
    assert client.get(f"/comments/{event['id']}").json() == []
