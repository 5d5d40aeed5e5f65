"""
Recipe Box Database Models
Central import module for all database models
"""

from .users import User
from .saved_recipes import SavedRecipe, MealCategory

__all__ = [
    "User",
    "SavedRecipe",
    "MealCategory",
]
