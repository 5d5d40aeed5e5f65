"""
Pytest configuration and fixtures for Recipe Box tests.

This module provides shared fixtures for testing including:
- A temporary SQLite database per test
- A stubbed Spoonacular provider
- An in-process HTTP client
- Registered users with bearer tokens
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from core.config import Settings
from core.context import AppContext
from main import create_app


TEST_API_KEY = "test-api-key"
TEST_JWT_SECRET = "test-jwt-secret"

SEARCH_RESULTS: List[Dict[str, Any]] = [
    {"id": 55, "title": "Soup", "image": "img.jpg", "imageType": "jpg"},
    {"id": 716429, "title": "Pasta with Garlic", "image": "pasta.jpg", "imageType": "jpg"},
]

RECIPE_DETAIL: Dict[str, Any] = {
    "id": 55,
    "title": "Soup",
    "image": "img.jpg",
    "servings": 2,
    "readyInMinutes": 30,
    "extendedIngredients": [{"name": "water"}, {"name": "salt"}],
    "instructions": "Boil the water. Add salt.",
}


class FakeProvider:
    """Stands in for the Spoonacular API behind httpx.MockTransport"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)

        if request.url.path == "/recipes/complexSearch":
            return httpx.Response(
                200,
                json={"results": SEARCH_RESULTS, "offset": 0, "number": 2, "totalResults": 2},
            )
        if request.url.path == "/recipes/55/information":
            return httpx.Response(200, json=RECIPE_DETAIL)
        return httpx.Response(404, json={"status": "failure", "message": "Not found"})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database"""
    return Settings(
        _env_file=None,
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        BCRYPT_ROUNDS=4,
        SPOONACULAR_API_KEY=TEST_API_KEY,
        SPOONACULAR_BASE_URL="https://spoonacular.test",
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
async def context(settings, provider):
    """Started application context with a stubbed provider"""
    app_context = AppContext(settings, http_transport=httpx.MockTransport(provider))
    await app_context.startup()
    yield app_context
    await app_context.shutdown()


@pytest.fixture
async def db_session(context):
    async with context.database.session() as session:
        yield session


@pytest.fixture
def app(settings, context):
    return create_app(settings, context)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


async def register_and_login(client, username: str, email: str, password: str) -> Dict[str, Any]:
    """Register a user over HTTP and return the login payload"""
    response = await client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text

    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
async def auth_headers(client):
    """Bearer headers for user 'a'"""
    payload = await register_and_login(client, "a", "a@x.com", "pw")
    return {"Authorization": f"Bearer {payload['token']}"}


@pytest.fixture
async def other_auth_headers(client):
    """Bearer headers for a second user 'b'"""
    payload = await register_and_login(client, "b", "b@x.com", "pw2")
    return {"Authorization": f"Bearer {payload['token']}"}
