from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker

# Settings are read at import time, so configure them before importing the apps
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ.setdefault("ENV", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from ewm.db import get_db, make_engine  # noqa: E402
from ewm.main import app  # noqa: E402
from ewm.models import Base  # noqa: E402
from ewm.stats_client import StatsClient, get_stats_client  # noqa: E402
from ewm_stats.db import get_db as stats_get_db  # noqa: E402
from ewm_stats.main import app as stats_app  # noqa: E402
from ewm_stats.models import Base as StatsBase  # noqa: E402

engine = make_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

stats_engine = make_engine("sqlite://", poolclass=StaticPool)
StatsSessionLocal = sessionmaker(bind=stats_engine, autoflush=False, expire_on_commit=False)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def override_stats_get_db():
    db = StatsSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def clean_db():
    # Fresh schema for every test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    StatsBase.metadata.drop_all(bind=stats_engine)
    StatsBase.metadata.create_all(bind=stats_engine)
    yield


@pytest.fixture
def stats_client():
    # The real stats service, served in-process
    stats_app.dependency_overrides[stats_get_db] = override_stats_get_db
    stats = StatsClient(http=TestClient(stats_app))
    app.dependency_overrides[get_stats_client] = lambda: stats
    yield stats
    app.dependency_overrides.pop(get_stats_client, None)
    stats_app.dependency_overrides.pop(stats_get_db, None)
    stats.close()


@pytest.fixture
def client(stats_client) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def future(**delta) -> str:
    when = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(**delta)
    return when.strftime("%Y-%m-%d %H:%M:%S")


class Api:
    """Thin helpers over the HTTP surface used to arrange test data."""

    future = staticmethod(future)

    def __init__(self, client: TestClient) -> None:
        self.client = client
        self._seq = count(1)

    def user(self, name: str | None = None) -> dict:
        n = next(self._seq)
        resp = self.client.post(
            "/admin/users",
            json={"name": name or f"User {n}", "email": f"user{n}@example.com"},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    def category(self, name: str | None = None) -> dict:
        resp = self.client.post(
            "/admin/categories", json={"name": name or f"Category {next(self._seq)}"}
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    def event(self, user_id: int, category_id: int, **overrides) -> dict:
        payload = {
            "title": "Evening concert",
            "annotation": "An evening of live chamber music in the park",
            "description": "Bring a blanket; the quartet plays Haydn and Dvorak until dusk.",
            "category": category_id,
            "eventDate": future(days=1),
            "location": {"lat": 55.75, "lon": 37.61},
        }
        payload.update(overrides)
        resp = self.client.post(f"/users/{user_id}/events", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    def publish(self, event_id: int) -> dict:
        resp = self.client.patch(
            f"/admin/events/{event_id}", json={"stateAction": "PUBLISH_EVENT"}
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    def published_event(self, user_id: int, category_id: int, **overrides) -> dict:
        event = self.event(user_id, category_id, **overrides)
        return self.publish(event["id"])

    def request(self, user_id: int, event_id: int):
        return self.client.post(f"/users/{user_id}/requests", params={"eventId": event_id})


@pytest.fixture
def api(client: TestClient) -> Api:
    return Api(client)
