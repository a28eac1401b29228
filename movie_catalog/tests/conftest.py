import pytest
from fastapi.testclient import TestClient

from movie_catalog.auth.users import AuthService, UserRepository
from movie_catalog.config import DEFAULT_API_TOKEN, DEFAULT_JWT_SECRET, Settings
from movie_catalog.main import create_app

TEST_SECRET = DEFAULT_JWT_SECRET
API_TOKEN = DEFAULT_API_TOKEN


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.sqlite'}",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_service():
    service = AuthService(UserRepository(bcrypt_rounds=4), secret=TEST_SECRET)
    service.seed_demo_user()
    return service


@pytest.fixture
def user_headers(client):
    response = client.post("/api/auth/login", json={"username": "user", "password": "12345"})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers():
    return {"x-api-token": API_TOKEN}
