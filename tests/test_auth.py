"""
Tests for the authentication service and the auth/user endpoints.
"""

import asyncio

import pytest
from jose import jwt

from core.config import Settings
from core.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
)
from models.users import User
from schemas.auth_schemas import UserCreate, UserLogin
from services.auth_service import AuthService
from tests.conftest import TEST_JWT_SECRET, register_and_login


@pytest.mark.unit
class TestAuthService:
    """Tests for AuthService."""

    def test_password_hash_round_trip(self, context):
        service = context.auth_service
        hashed = service.hash_password("pw")

        assert hashed != "pw"
        assert service.verify_password("pw", hashed)
        assert not service.verify_password("wrong", hashed)

    def test_verify_password_with_garbage_hash(self, context):
        assert context.auth_service.verify_password("pw", "not-a-bcrypt-hash") is False

    def test_token_encodes_user_id(self, context):
        service = context.auth_service
        token = service.create_access_token("user-123")

        assert service.verify_token(token) == "user-123"
        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])
        assert payload["sub"] == "user-123"
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_expired_token_is_rejected(self, settings):
        expired_settings = settings.model_copy(update={"JWT_ACCESS_TOKEN_EXPIRE_MINUTES": -1})
        service = AuthService(expired_settings)
        token = service.create_access_token("user-123")

        with pytest.raises(AuthenticationError, match="expired"):
            service.verify_token(token)

    def test_token_signed_with_other_secret_is_rejected(self, context):
        other = AuthService(Settings(_env_file=None, JWT_SECRET_KEY="another-secret"))
        token = other.create_access_token("user-123")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            context.auth_service.verify_token(token)

    def test_token_without_access_type_is_rejected(self, context):
        token = jwt.encode({"sub": "user-123", "type": "refresh"}, TEST_JWT_SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            context.auth_service.verify_token(token)

    async def test_register_stores_hash_not_password(self, context, db_session):
        user = await context.auth_service.register_user(
            UserCreate(username="a", email="A@X.com", password="pw"), db_session
        )

        assert user.id
        assert user.email == "a@x.com"
        assert user.password_hash != "pw"
        assert context.auth_service.verify_password("pw", user.password_hash)

    async def test_register_duplicate_email_conflicts(self, context, db_session):
        service = context.auth_service
        await service.register_user(UserCreate(username="a", email="a@x.com", password="pw"), db_session)

        with pytest.raises(ConflictError, match="email"):
            await service.register_user(
                UserCreate(username="other", email="a@x.com", password="pw"), db_session
            )

    async def test_register_duplicate_username_conflicts(self, context, db_session):
        service = context.auth_service
        await service.register_user(UserCreate(username="a", email="a@x.com", password="pw"), db_session)

        with pytest.raises(ConflictError, match="Username"):
            await service.register_user(
                UserCreate(username="a", email="other@x.com", password="pw"), db_session
            )

    @pytest.mark.parametrize(
        "rival, message",
        [
            ({"username": "rival", "email": "a@x.com"}, "User with this email already exists"),
            ({"username": "a", "email": "rival@x.com"}, "Username is already taken"),
        ],
    )
    async def test_register_loses_race_on_commit(self, context, db_session, monkeypatch, rival, message):
        """Another request inserts the same user between the duplicate check and commit"""
        commit = db_session.commit
        raced = []

        async def commit_after_rival():
            if not raced:
                raced.append(True)
                async with context.database.session() as other:
                    other.add(User(password_hash="x", **rival))
            await commit()

        monkeypatch.setattr(db_session, "commit", commit_after_rival)

        with pytest.raises(ConflictError) as exc_info:
            await context.auth_service.register_user(
                UserCreate(username="a", email="a@x.com", password="pw"), db_session
            )

        assert exc_info.value.message == message
        users = await context.auth_service.list_users(db_session)
        assert [user.username for user in users] == [rival["username"]]

    async def test_authenticate_user(self, context, db_session):
        service = context.auth_service
        created = await service.register_user(
            UserCreate(username="a", email="a@x.com", password="pw"), db_session
        )

        user, token = await service.authenticate_user(UserLogin(email="a@x.com", password="pw"), db_session)

        assert user.id == created.id
        assert service.verify_token(token) == created.id

    async def test_authenticate_unknown_email(self, context, db_session):
        with pytest.raises(NotFoundError):
            await context.auth_service.authenticate_user(
                UserLogin(email="nobody@x.com", password="pw"), db_session
            )

    async def test_authenticate_wrong_password(self, context, db_session):
        service = context.auth_service
        await service.register_user(UserCreate(username="a", email="a@x.com", password="pw"), db_session)

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate_user(UserLogin(email="a@x.com", password="nope"), db_session)


@pytest.mark.integration
class TestAuthRoutes:
    """Tests for registration and login routes."""

    @pytest.mark.parametrize(
        "second, message",
        [
            ({"username": "other", "email": "a@x.com"}, "User with this email already exists"),
            ({"username": "a", "email": "z@x.com"}, "Username is already taken"),
        ],
    )
    async def test_concurrent_registrations(self, client, second, message):
        responses = await asyncio.gather(
            client.post("/api/auth/register", json={"username": "a", "email": "a@x.com", "password": "pw"}),
            client.post("/api/auth/register", json={**second, "password": "pw"}),
        )

        statuses = sorted(response.status_code for response in responses)
        assert statuses == [201, 409]
        conflict = next(response for response in responses if response.status_code == 409)
        assert conflict.json()["detail"] == message

    async def test_register_returns_user_without_password(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": "a", "email": "a@x.com", "password": "pw"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Registration successful"
        assert body["user"]["username"] == "a"
        assert body["user"]["email"] == "a@x.com"
        assert "password" not in response.text
        assert "password_hash" not in body["user"]

    async def test_register_twice_with_same_email(self, client):
        payload = {"username": "a", "email": "a@x.com", "password": "pw"}
        first = await client.post("/api/auth/register", json=payload)
        second = await client.post(
            "/api/auth/register",
            json={"username": "a2", "email": "a@x.com", "password": "pw"},
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["detail"] == "User with this email already exists"

    @pytest.mark.parametrize("missing", ["username", "email", "password"])
    async def test_register_missing_field(self, client, missing):
        payload = {"username": "a", "email": "a@x.com", "password": "pw"}
        del payload[missing]

        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert missing in response.json()["detail"]

    async def test_register_rejects_blank_username(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": "   ", "email": "a@x.com", "password": "pw"},
        )
        assert response.status_code == 400

    async def test_register_rejects_unknown_fields(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": "a", "email": "a@x.com", "password": "pw", "is_admin": True},
        )
        assert response.status_code == 400

    async def test_login_returns_decodable_token(self, client):
        register = await client.post(
            "/api/auth/register",
            json={"username": "a", "email": "a@x.com", "password": "pw"},
        )
        user_id = register.json()["user"]["id"]

        response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 3600
        assert body["user"]["id"] == user_id
        assert "password" not in response.text
        payload = jwt.decode(body["token"], TEST_JWT_SECRET, algorithms=["HS256"])
        assert payload["sub"] == user_id

    async def test_login_wrong_password(self, client):
        await register_and_login(client, "a", "a@x.com", "pw")

        response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "bad"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid password"

    async def test_login_unknown_email(self, client):
        response = await client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "pw"})

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_login_missing_password(self, client):
        response = await client.post("/api/auth/login", json={"email": "a@x.com"})
        assert response.status_code == 400


@pytest.mark.integration
class TestProtectedRoutes:
    """Tests for the bearer guard and the user listing."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/users"),
            ("GET", "/api/recipes/saved"),
            ("POST", "/api/recipes/save"),
            ("PUT", "/api/recipes/reorder"),
            ("DELETE", "/api/recipes/some-id"),
        ],
    )
    async def test_requires_authorization_header(self, client, method, path):
        response = await client.request(method, path)

        assert response.status_code == 401
        assert response.json()["detail"] == "Access denied. No token provided."
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_rejects_malformed_token(self, client):
        response = await client.get("/api/recipes/saved", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    async def test_rejects_non_bearer_scheme(self, client):
        response = await client.get("/api/recipes/saved", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    async def test_rejects_expired_token(self, client, settings):
        expired = AuthService(settings.model_copy(update={"JWT_ACCESS_TOKEN_EXPIRE_MINUTES": -5}))
        token = expired.create_access_token("user-123")

        response = await client.get("/api/recipes/saved", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    async def test_list_users_excludes_passwords(self, client, auth_headers, other_auth_headers):
        response = await client.get("/api/users", headers=auth_headers)

        assert response.status_code == 200
        users = response.json()
        assert [user["username"] for user in users] == ["a", "b"]
        assert all("password" not in user and "password_hash" not in user for user in users)
        assert "$2b$" not in response.text
