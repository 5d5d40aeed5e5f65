"""
Recipe Box Authentication Endpoints
Registration and login
"""

from fastapi import APIRouter, HTTPException, status
import logging

from core.dependencies import AuthServiceDep, DbSession
from core.exceptions import RecipeBoxError
from schemas.auth_schemas import (
    UserCreate, UserLogin, User, RegisterResponse, LoginResponse
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: DbSession,
    auth_service: AuthServiceDep,
):
    """
    Register a new user account

    Email and username must both be unused. The response never includes
    the password hash.
    """
    try:
        user = await auth_service.register_user(user_data, db)
    except RecipeBoxError as e:
        logger.warning(f"Registration failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Registration error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error registering user"
        )

    return RegisterResponse(
        user=User.model_validate(user),
        message="Registration successful"
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    db: DbSession,
    auth_service: AuthServiceDep,
):
    """
    Authenticate user and return a bearer token

    404 for an unknown email, 401 for a wrong password.
    """
    try:
        user, token = await auth_service.authenticate_user(login_data, db)
    except RecipeBoxError as e:
        logger.warning(f"Login failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Login error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error logging in"
        )

    return LoginResponse(
        token=token,
        expires_in=auth_service.access_token_expire_minutes * 60,
        user=User.model_validate(user),
        message="Login successful"
    )
