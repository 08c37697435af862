from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ewm.db import get_db, make_engine
from ewm.main import app
from ewm.models import Base, Event

PG_URL = os.getenv("TEST_DATABASE_URL", "")

pytestmark = pytest.mark.skipif(
    not PG_URL.startswith("postgresql"),
    reason="row locking needs TEST_DATABASE_URL pointing at PostgreSQL",
)


@pytest.fixture
def pg_client(stats_client):
    engine = make_engine(PG_URL)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    PgSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def _get_db():
        db = PgSession()
        try:
            yield db
        finally:
            db.close()

    previous = app.dependency_overrides.get(get_db)
    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app), PgSession
    finally:
        app.dependency_overrides[get_db] = previous
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _new_user(client: TestClient, n: int) -> int:
    resp = client.post("/admin/users", json={"name": f"User {n}", "email": f"pg{n}@example.com"})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_concurrent_requests_never_exceed_limit(pg_client):
    client, PgSession = pg_client
    owner = _new_user(client, 0)
    cat = client.post("/admin/categories", json={"name": "Crowded"}).json()["id"]
    event = client.post(
        f"/users/{owner}/events",
        json={
            "title": "Small room",
            "annotation": "Only three seats in this tiny venue tonight",
            "description": "First come, first served; the rest get a conflict.",
            "category": cat,
            "eventDate": "2099-01-01 19:00:00",
            "location": {"lat": 1.0, "lon": 2.0},
            "participantLimit": 3,
            "requestModeration": False,
        },
    ).json()["id"]
    client.patch(f"/admin/events/{event}", json={"stateAction": "PUBLISH_EVENT"})

    users = [_new_user(client, n) for n in range(1, 11)]
    barrier = threading.Barrier(len(users))

    def _request(user_id: int) -> int:
        local_client = TestClient(app)
        barrier.wait()
        return local_client.post(
            f"/users/{user_id}/requests", params={"eventId": event}
        ).status_code

    with ThreadPoolExecutor(max_workers=len(users)) as executor:
        statuses = list(executor.map(_request, users))

    assert statuses.count(201) == 3
    assert statuses.count(409) == 7

    with PgSession() as db:
        assert db.get(Event, event).confirmed_requests == 3
