"""Общие фикстуры: приложение на временной sqlite-базе и авторизованный клиент."""
from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from vehicle_tracker.config import Settings
from vehicle_tracker.main import create_app

TEST_JWT_SECRET = "test-secret-for-the-vehicle-tracker-suite"
DEFAULT_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Настройки с отдельной sqlite-базой на каждый тест."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vehicle_tracker.db'}",
        jwt_secret=TEST_JWT_SECRET,
        jwt_expiration="1d",
        create_schema=True,
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def register_user(
    client: TestClient,
    username: str = "demo",
    password: str = DEFAULT_PASSWORD,
    email: str | None = None,
    name: str = "Demo User",
) -> dict:
    payload = {
        "username": username,
        "password": password,
        "email": email or f"{username}@example.com",
        "name": name,
    }
    resp = client.post("/api/user/create", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def login(client: TestClient, username: str = "demo", password: str = DEFAULT_PASSWORD) -> Dict[str, str]:
    resp = client.post("/api/user/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['authToken']}"}


@pytest.fixture
def auth_headers(client: TestClient) -> Dict[str, str]:
    """Заголовки с токеном зарегистрированного пользователя ``demo``."""
    register_user(client)
    return login(client)
