"""
Recipe Box Application Context
Process-wide collaborators with an explicit startup/shutdown lifecycle
"""

from typing import Optional
import httpx
import structlog

from core.config import Settings
from core.database import Database
from services.auth_service import AuthService
from services.recipe_search_service import RecipeSearchGateway
from services.saved_recipe_service import SavedRecipeService

logger = structlog.get_logger()


class AppContext:
    """Holds the database, upstream client and services for one app instance"""

    def __init__(self, settings: Settings, http_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.database = Database(settings)
        self.auth_service = AuthService(settings)
        self.saved_recipe_service = SavedRecipeService()
        self.http_transport = http_transport
        self.recipe_gateway: Optional[RecipeSearchGateway] = None

    async def startup(self) -> None:
        await self.database.connect()
        self.recipe_gateway = RecipeSearchGateway(self.settings, transport=self.http_transport)
        logger.info("Application context started")

    async def shutdown(self) -> None:
        if self.recipe_gateway:
            await self.recipe_gateway.close()
            self.recipe_gateway = None
        await self.database.disconnect()
        logger.info("Application context stopped")
