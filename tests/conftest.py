# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo.core.config import Settings
from todo.core.database import build_engine, build_sessionmaker, init_models
from todo.main import create_app
from todo.services.auth import AuthService

from .helpers import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'todo.db'}",
        SECRET_KEY="test-secret",
    )


@pytest.fixture()
async def db(settings: Settings):
    engine = build_engine(settings)
    await init_models(engine)
    async with build_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0))


@pytest.fixture()
async def owner(db):
    return await AuthService(db).register("alice", "wonderland")


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login(client: TestClient):
    """Sign up (if needed) and log in as `username`, replacing any current session."""

    def _login(username: str, password: str = "secret") -> None:
        client.get("/auth/logout")
        client.post("/auth/signup", data={"username": username, "password": password})
        resp = client.post(
            "/auth/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )
        assert resp.status_code == 303
        assert resp.headers["location"] == "/"

    return _login
