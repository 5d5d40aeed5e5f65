"""
Recipe Box Authentication Service
Password hashing, registration, login and JWT issuing/verification
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Tuple
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import Settings
from core.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from models.users import User
from schemas.auth_schemas import UserCreate, UserLogin

logger = structlog.get_logger()

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class AuthService:
    def __init__(self, settings: Settings):
        self.bcrypt_rounds = settings.BCRYPT_ROUNDS

        # JWT settings
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def hash_password(self, password: str) -> str:
        """Hash a password"""
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES],
                hashed_password.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def create_access_token(self, user_id: str) -> str:
        """Create JWT access token"""
        now = datetime.now(timezone.utc)
        to_encode: Dict[str, Any] = {
            "sub": user_id,
            "iat": now,
            "exp": now + timedelta(minutes=self.access_token_expire_minutes),
            "type": "access",
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str:
        """Verify a JWT access token and return the embedded user id"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except JWTError:
            raise AuthenticationError("Invalid token")

        user_id = payload.get("sub")
        if payload.get("type") != "access" or not user_id:
            raise AuthenticationError("Invalid token")

        return user_id

    async def register_user(self, user_data: UserCreate, db: AsyncSession) -> User:
        """Register a new user; email and username must be unused"""
        username = user_data.username.strip()
        email = user_data.email.lower()
        if not username or not email or not user_data.password:
            raise ValidationError("All fields are required")

        existing = await db.execute(select(User).where(User.email == email))
        if existing.scalar_one_or_none():
            raise ConflictError("User with this email already exists")

        existing = await db.execute(select(User).where(User.username == username))
        if existing.scalar_one_or_none():
            raise ConflictError("Username is already taken")

        user = User(
            username=username,
            email=email,
            password_hash=self.hash_password(user_data.password),
        )
        db.add(user)

        try:
            await db.commit()
        except IntegrityError:
            # Concurrent registration won the unique constraint
            await db.rollback()
            existing = await db.execute(select(User.id).where(User.email == email))
            if existing.first() is not None:
                raise ConflictError("User with this email already exists")
            raise ConflictError("Username is already taken")

        await db.refresh(user)
        logger.info("User registered", user_id=user.id)
        return user

    async def authenticate_user(self, login_data: UserLogin, db: AsyncSession) -> Tuple[User, str]:
        """Check credentials and issue an access token"""
        result = await db.execute(select(User).where(User.email == login_data.email.lower()))
        user = result.scalar_one_or_none()

        if not user:
            raise NotFoundError("User not found")

        if not self.verify_password(login_data.password, user.password_hash):
            logger.warning("Login failed", user_id=user.id, reason="invalid_password")
            raise InvalidCredentialsError("Invalid password")

        token = self.create_access_token(user.id)
        logger.info("User logged in", user_id=user.id)
        return user, token

    async def list_users(self, db: AsyncSession) -> List[User]:
        """All registered users, oldest first"""
        result = await db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())
