"""
Shared fixtures: an app on an in-memory database per test.
"""

import pytest

from config import TestingConfig
from main import create_app
from auth import AccountService


@pytest.fixture
def config() -> TestingConfig:
    return TestingConfig()


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    session = app.extensions["db_sessionmaker"]()
    yield session
    session.close()


@pytest.fixture
def service(db_session, config) -> AccountService:
    return AccountService(db_session, config)


@pytest.fixture
def registered_user(client) -> dict:
    """Register Ann through the API and return the response body."""
    response = client.post(
        "/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret1"},
    )
    assert response.status_code == 201
    return response.get_json()
