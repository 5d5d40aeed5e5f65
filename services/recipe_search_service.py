"""
Recipe Box Recipe Search Gateway
Forwards search and detail lookups to the Spoonacular API
"""

from typing import Any, Dict, List, Optional, Union
import re
import httpx
import structlog

from core.config import Settings
from core.exceptions import UpstreamError, ValidationError

logger = structlog.get_logger()


class RecipeSearchGateway:
    """Client for the Spoonacular recipe API; results are relayed verbatim"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.SPOONACULAR_API_KEY
        self.base_url = settings.SPOONACULAR_BASE_URL.rstrip("/")
        self.timeout = settings.SPOONACULAR_TIMEOUT
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    def _add_api_key(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Add API key to request parameters"""
        params = params.copy()
        params["apiKey"] = self.api_key
        return params

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        params = self._add_api_key(params or {})

        try:
            response = await self.client.get(endpoint, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            logger.error("Recipe provider timed out", endpoint=endpoint, error=str(e))
            raise UpstreamError("Recipe provider timed out")
        except httpx.HTTPStatusError as e:
            logger.error(
                "Recipe provider returned error",
                endpoint=endpoint,
                status=e.response.status_code,
                body=e.response.text[:500],
            )
            raise UpstreamError(
                f"Recipe provider error: {e.response.status_code}",
                upstream_status=e.response.status_code,
                body=e.response.text,
            )
        except httpx.RequestError as e:
            logger.error("Recipe provider request failed", endpoint=endpoint, error=str(e))
            raise UpstreamError(f"Recipe provider request failed: {type(e).__name__}")
        except ValueError as e:
            logger.error("Recipe provider returned invalid JSON", endpoint=endpoint, error=str(e))
            raise UpstreamError("Recipe provider returned invalid JSON")

    async def search(
        self,
        query: Optional[str],
        number: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Run a complex search and return the provider's result list"""
        if query is None or not query.strip():
            raise ValidationError("Query parameter is required")

        params: Dict[str, Any] = {"query": query}
        if number is not None:
            params["number"] = number
        if offset is not None:
            params["offset"] = offset

        data = await self._get("/recipes/complexSearch", params)
        if not isinstance(data, dict):
            raise UpstreamError("Recipe provider returned an unexpected payload")

        return data.get("results", [])

    async def fetch_detail(self, recipe_id: Union[int, str]) -> Dict[str, Any]:
        """Full recipe information for one provider id"""
        # Provider ids are numeric; the id is interpolated into the path
        if not re.fullmatch(r"[0-9]+", str(recipe_id)):
            raise ValidationError("Invalid recipe id")

        return await self._get(f"/recipes/{recipe_id}/information")
