"""
Recipe Box Recipe Schemas
Pydantic models for saved recipe requests and responses
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.saved_recipes import MealCategory


class SavedRecipeCreate(BaseModel):
    """Schema for saving a provider recipe"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    recipe_id: str = Field(..., alias="recipeId", min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=500)
    image: str = Field(..., min_length=1, max_length=1000)
    category: MealCategory


class SavedRecipe(BaseModel):
    """Schema for a saved recipe record"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    recipe_id: str = Field(..., alias="recipeId")
    title: str
    image: str
    category: MealCategory
    position: int
    created_at: Optional[datetime] = None


class ReorderRequest(BaseModel):
    """Schema for reordering saved recipes; ids in their new display order"""
    model_config = ConfigDict(extra="forbid")

    recipes: List[str] = Field(..., min_length=1)


class MessageResponse(BaseModel):
    """Schema for simple confirmation responses"""
    message: str
