"""
Recipe Box Core Dependencies
FastAPI dependencies for the application context, sessions and authentication
"""

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator, Optional, Annotated
import structlog

from core.context import AppContext
from core.exceptions import AuthenticationError
from services.auth_service import AuthService
from services.recipe_search_service import RecipeSearchGateway
from services.saved_recipe_service import SavedRecipeService

logger = structlog.get_logger()

# Security scheme
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    """Application context attached by the lifespan"""
    return request.app.state.context


async def get_db(context: AppContext = Depends(get_context)) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to get database session
    """
    async with context.database.session() as session:
        yield session


def get_auth_service(context: AppContext = Depends(get_context)) -> AuthService:
    return context.auth_service


def get_saved_recipe_service(context: AppContext = Depends(get_context)) -> SavedRecipeService:
    return context.saved_recipe_service


def get_recipe_gateway(context: AppContext = Depends(get_context)) -> RecipeSearchGateway:
    return context.recipe_gateway


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """
    Resolve the authenticated user id from the bearer token

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid/expired
    """
    if not credentials or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return auth_service.verify_token(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=e.message)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type aliases for common dependencies
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SavedRecipeServiceDep = Annotated[SavedRecipeService, Depends(get_saved_recipe_service)]
RecipeGatewayDep = Annotated[RecipeSearchGateway, Depends(get_recipe_gateway)]
