import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.pop("GEMINI_API_KEY", None)

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from civicfeed.core.ratelimit import limiter
from civicfeed.db.store import EntityKind, MemoryStore
from civicfeed.main import create_app
from civicfeed.services.classifier import Classifier

limiter.enabled = False


class FakeClock:
    """Deterministic clock: starts at a fixed instant, moves only when told."""

    def __init__(self):
        self.current = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStore(clock=clock)


@pytest.fixture
def client(store):
    app = create_app(store=store, classifier=Classifier(api_key=None))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def users(store):
    by_name = {u.username: u for u in store.list_all(EntityKind.user)}
    return by_name


@pytest.fixture
def admin(users):
    return users["admin"]


@pytest.fixture
def citizen(users):
    return users["user"]


@pytest.fixture
def technician(store):
    return store.list_all(EntityKind.technician)[0]
