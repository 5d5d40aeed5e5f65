"""
Recipe Box User Management Endpoints
Administrative user listing
"""

from fastapi import APIRouter, HTTPException, status
from typing import List
import structlog

from core.dependencies import AuthServiceDep, CurrentUserId, DbSession
from schemas.auth_schemas import User

logger = structlog.get_logger()
router = APIRouter()


@router.get("", response_model=List[User])
async def list_users(
    current_user_id: CurrentUserId,
    db: DbSession,
    auth_service: AuthServiceDep,
):
    """List all users without their password hashes"""
    try:
        users = await auth_service.list_users(db)
    except Exception as e:
        logger.error("Failed to list users", user_id=current_user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching users"
        )

    return [User.model_validate(user) for user in users]
