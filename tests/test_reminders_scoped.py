from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from todo.core.config import Settings
from todo.routers.tasks import get_clock


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'todo.db'}",
        SECRET_KEY="test-secret",
        REMINDERS_SCOPE_TO_OWNER=True,
    )


def test_scoped_reminders_require_a_session(client: TestClient):
    resp = client.get("/reminders/due", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/auth/login"


def test_scoped_reminders_only_show_own_tasks(app, client: TestClient, login):
    app.dependency_overrides[get_clock] = lambda: (lambda: datetime(2025, 1, 1, 12, 0))

    login("alice")
    client.post("/tasks", data={"title": "Alice reminder", "reminder_time": "2025-01-01T11:00"})
    login("bob")
    client.post("/tasks", data={"title": "Bob reminder", "reminder_time": "2025-01-01T11:00"})

    assert [t["title"] for t in client.get("/reminders/due").json()] == ["Bob reminder"]
