"""
Recipe Box Saved Recipe Service
Save, list, reorder and remove recipes scoped to their owner
"""

from typing import List
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import NotFoundError, ValidationError
from models.saved_recipes import MealCategory, SavedRecipe
from models.users import User
from schemas.recipe_schemas import SavedRecipeCreate

logger = structlog.get_logger()


class SavedRecipeService:
    """Every query filters on SavedRecipe.user_id, the single owner of a record"""

    async def save_recipe(
        self,
        db: AsyncSession,
        user_id: str,
        recipe_data: SavedRecipeCreate,
    ) -> SavedRecipe:
        """Append a recipe to the end of the user's list"""
        if await db.get(User, user_id) is None:
            raise NotFoundError("User not found")

        try:
            category = MealCategory(recipe_data.category)
        except ValueError:
            raise ValidationError("Category must be one of: breakfast, lunch, dinner")

        result = await db.execute(
            select(func.max(SavedRecipe.position)).where(SavedRecipe.user_id == user_id)
        )
        last_position = result.scalar()

        saved_recipe = SavedRecipe(
            user_id=user_id,
            recipe_id=recipe_data.recipe_id,
            title=recipe_data.title,
            image=recipe_data.image,
            category=category,
            position=0 if last_position is None else last_position + 1,
        )
        db.add(saved_recipe)
        await db.commit()
        await db.refresh(saved_recipe)

        logger.info(
            "Recipe saved",
            user_id=user_id,
            saved_recipe_id=saved_recipe.id,
            position=saved_recipe.position,
        )
        return saved_recipe

    async def list_recipes(self, db: AsyncSession, user_id: str) -> List[SavedRecipe]:
        """The user's saved recipes in display order"""
        result = await db.execute(
            select(SavedRecipe)
            .where(SavedRecipe.user_id == user_id)
            .order_by(SavedRecipe.position, SavedRecipe.created_at)
        )
        return list(result.scalars().all())

    async def reorder_recipes(self, db: AsyncSession, user_id: str, recipe_ids: List[str]) -> None:
        """
        Set each recipe's position to its index in recipe_ids

        All ids must belong to the user; nothing is written otherwise.
        """
        if not recipe_ids:
            raise ValidationError("Recipe list must not be empty")
        if len(set(recipe_ids)) != len(recipe_ids):
            raise ValidationError("Recipe list contains duplicate ids")

        result = await db.execute(
            select(SavedRecipe).where(
                SavedRecipe.user_id == user_id,
                SavedRecipe.id.in_(recipe_ids),
            )
        )
        owned = {recipe.id: recipe for recipe in result.scalars().all()}

        missing = [recipe_id for recipe_id in recipe_ids if recipe_id not in owned]
        if missing:
            raise NotFoundError(f"Recipes not found: {', '.join(missing)}")

        for index, recipe_id in enumerate(recipe_ids):
            owned[recipe_id].position = index

        await db.commit()
        logger.info("Recipes reordered", user_id=user_id, count=len(recipe_ids))

    async def remove_recipe(self, db: AsyncSession, user_id: str, recipe_id: str) -> None:
        """Delete one of the user's saved recipes"""
        result = await db.execute(
            select(SavedRecipe).where(
                SavedRecipe.id == recipe_id,
                SavedRecipe.user_id == user_id,
            )
        )
        saved_recipe = result.scalar_one_or_none()
        if saved_recipe is None:
            raise NotFoundError("Recipe not found")

        await db.delete(saved_recipe)
        await db.commit()
        logger.info("Recipe removed", user_id=user_id, saved_recipe_id=recipe_id)
