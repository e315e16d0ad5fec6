"""
- Provide a fixed SecretYear so games are predictable.
- Provide a store built on a fake selector, and override FastAPI's get_store
  so routes use it.
- Provide a client fixture (TestClient(app)) that already has the override applied.
"""
import pytest

from fastapi.testclient import TestClient

from endless_history.main import app, get_store
from endless_history.models import HistoricalEvent, SecretYear
from endless_history.store import SessionStore


def make_events(count: int, year: str = "1969"):
    return [HistoricalEvent(description=f"Event {i + 1} of {year}", year=year) for i in range(count)]


def make_secret(year: str = "1969", count: int = 8) -> SecretYear:
    return SecretYear(year=year, events=tuple(make_events(count, year)))


def make_fake_selector(year: str = "1969", count: int = 8):
    """Ignores randomness and the network: always picks `year`."""
    async def fake_selector() -> SecretYear:
        return make_secret(year, count)
    return fake_selector


@pytest.fixture
def store():
    return SessionStore(selector=make_fake_selector("1969"))


@pytest.fixture(autouse=True)
def override_store(store):
    """Force the app to use our store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)
