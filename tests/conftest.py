"""Shared pytest fixtures."""

from collections.abc import Iterator
from typing import Any, cast

import pytest
from fastapi.testclient import TestClient

from expensetracker.app import App
from expensetracker.config import Config
from expensetracker.core.core import Core
from expensetracker.web.server import create_fastapi_app
from tests.fakes import FakeDatabase

SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config():
    return Config(
        database_url="mongodb://localhost:27017/expensetracker_test",
        token_secret_key=SECRET_KEY,
        token_ttl_seconds=3600,
        bcrypt_rounds=4,
        debug=False,
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def core(config, database):
    return Core(config, cast(Any, database))


@pytest.fixture
def app(config, core):
    return App(config, core)


@pytest.fixture
def client(app, config) -> Iterator[TestClient]:
    """HTTP client running the full FastAPI app, lifespan included."""
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client


def register_and_login(client: TestClient, username: str, password: str) -> dict[str, str]:
    """Create an account and return Authorization headers for it."""
    response = client.post("/api/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
