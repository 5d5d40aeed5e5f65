"""
Recipe Box Services Module
Core business logic
"""

from .auth_service import AuthService
from .recipe_search_service import RecipeSearchGateway
from .saved_recipe_service import SavedRecipeService

__all__ = [
    "AuthService",
    "RecipeSearchGateway",
    "SavedRecipeService",
]
