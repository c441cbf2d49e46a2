import pytest
from fastapi.testclient import TestClient

from account_server.config import Settings
from account_server.main import create_app


SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret=SECRET,
        database_url=f"sqlite:///{tmp_path / 'accounts.db'}",
        token_expire_minutes=60,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(username="alice", password="p1", **extra):
        body = {"username": username, "password": password, **extra}
        return client.post("/api/users/register", json=body)
    return _register
