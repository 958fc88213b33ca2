"""Pytest configuration and fixtures for dedications tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from dedications.config import Settings
from dedications.service import EntryService
from dedications.storage import Database, EntryRepository
from dedications.web.app import create_app


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        self.calls += 1
        return self.current.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def valid_payload(**overrides):
    """A create request body that passes validation."""
    payload = {
        "sponsor_name": "Ada Lovelace",
        "email": "ada@example.org",
        "dedication_name": "Charles Babbage",
        "amount": 1800,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "test.db"


@pytest.fixture
def db(db_path):
    with Database(db_path) as database:
        yield database


@pytest.fixture
def repo(db):
    return EntryRepository(db)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(repo, clock):
    return EntryService(repo, clock=clock)


@pytest.fixture
def settings(db_path):
    return Settings(db_path=db_path)


@pytest.fixture
def client(settings, clock):
    app = create_app(settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
