"""
Recipe Box Recipe Endpoints
Provider search/detail proxy and the user's saved recipe list
"""

from fastapi import APIRouter, HTTPException, status
from typing import Any, Dict, List, Optional
import structlog

from core.dependencies import (
    CurrentUserId, DbSession, RecipeGatewayDep, SavedRecipeServiceDep
)
from core.exceptions import RecipeBoxError, UpstreamError
from schemas.recipe_schemas import (
    MessageResponse, ReorderRequest, SavedRecipe, SavedRecipeCreate
)

logger = structlog.get_logger()
router = APIRouter()


def _to_http_error(e: RecipeBoxError, fallback: str) -> HTTPException:
    """Map a service error to an HTTPException; upstream failures stay generic"""
    if isinstance(e, UpstreamError):
        logger.error(
            fallback,
            error=e.message,
            upstream_status=e.upstream_status,
            upstream_body=(e.body or "")[:500],
        )
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=fallback)
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/search")
async def search_recipes(
    gateway: RecipeGatewayDep,
    query: Optional[str] = None,
    number: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Search recipes via Spoonacular; results are passed through unchanged"""
    try:
        return await gateway.search(query=query, number=number, offset=offset)
    except RecipeBoxError as e:
        raise _to_http_error(e, "Error fetching recipes")
    except Exception as e:
        logger.error("Search error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching recipes"
        )


@router.get("/detail/{recipe_id}")
async def get_recipe_detail(recipe_id: int, gateway: RecipeGatewayDep) -> Dict[str, Any]:
    """Full provider recipe information"""
    try:
        return await gateway.fetch_detail(recipe_id)
    except RecipeBoxError as e:
        raise _to_http_error(e, "Error fetching recipe details")
    except Exception as e:
        logger.error("Recipe detail error", recipe_id=recipe_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching recipe details"
        )


@router.post("/save", response_model=SavedRecipe, status_code=status.HTTP_201_CREATED)
async def save_recipe(
    recipe_data: SavedRecipeCreate,
    current_user_id: CurrentUserId,
    db: DbSession,
    service: SavedRecipeServiceDep,
):
    """Save a recipe to the end of the current user's list"""
    try:
        saved_recipe = await service.save_recipe(db, current_user_id, recipe_data)
    except RecipeBoxError as e:
        raise _to_http_error(e, "Error saving recipe")
    except Exception as e:
        logger.error("Save recipe error", user_id=current_user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving recipe"
        )

    return SavedRecipe.model_validate(saved_recipe)


@router.get("/saved", response_model=List[SavedRecipe])
async def list_saved_recipes(
    current_user_id: CurrentUserId,
    db: DbSession,
    service: SavedRecipeServiceDep,
):
    """The current user's saved recipes ordered by position"""
    try:
        saved_recipes = await service.list_recipes(db, current_user_id)
    except Exception as e:
        logger.error("List saved recipes error", user_id=current_user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching saved recipes"
        )

    return [SavedRecipe.model_validate(recipe) for recipe in saved_recipes]


@router.put("/reorder", response_model=MessageResponse)
async def reorder_recipes(
    reorder_data: ReorderRequest,
    current_user_id: CurrentUserId,
    db: DbSession,
    service: SavedRecipeServiceDep,
):
    """Persist a new display order; every id must belong to the current user"""
    try:
        await service.reorder_recipes(db, current_user_id, reorder_data.recipes)
    except RecipeBoxError as e:
        raise _to_http_error(e, "Error reordering recipes")
    except Exception as e:
        logger.error("Reorder error", user_id=current_user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error reordering recipes"
        )

    return MessageResponse(message="Recipes reordered successfully")


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def remove_recipe(
    recipe_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
    service: SavedRecipeServiceDep,
):
    """Remove a saved recipe owned by the current user"""
    try:
        await service.remove_recipe(db, current_user_id, recipe_id)
    except RecipeBoxError as e:
        raise _to_http_error(e, "Error removing recipe")
    except Exception as e:
        logger.error("Remove recipe error", user_id=current_user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error removing recipe"
        )

    return MessageResponse(message="Recipe removed successfully")
