"""Shared fixtures: settings over a temp SQLite file, app client, bearer tokens."""

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import jwt
import pytest
from fastapi.testclient import TestClient

from orbitcms.config import DatabaseSettings, Environment, SecuritySettings, Settings
from orbitcms.infrastructure.persistence import (
    Database,
    PageCollection,
    PlaylistCollection,
    TrackCollection,
)
from orbitcms.main import create_app

TEST_JWT_SECRET = "orbitcms-test-secret-with-enough-bytes-for-hs256"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment=Environment.DEVELOPMENT,
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        security=SecuritySettings(jwt_secret=TEST_JWT_SECRET),
    )


# Hey future me - the `with` block runs the lifespan, which creates the tables and puts
# db/auth_gate on app.state. A bare TestClient(app) would skip that and every route 503s.
@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(user_id: str = "user-1", role: str = "editor", **claims: Any) -> str:
        payload = {"userId": user_id, "role": role, **claims}
        return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def admin_headers(make_token: Callable[..., str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id='admin-1', role='admin')}"}


@pytest.fixture
async def database(settings: Settings) -> AsyncIterator[Database]:
    db = Database(settings)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def tracks(database: Database) -> TrackCollection:
    return TrackCollection(database)


@pytest.fixture
def playlists(database: Database) -> PlaylistCollection:
    return PlaylistCollection(database)


@pytest.fixture
def pages(database: Database) -> PageCollection:
    return PageCollection(database)
