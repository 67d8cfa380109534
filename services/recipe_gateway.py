"""
RecipeBox Recipe Gateway
Thin client over TheMealDB recipe catalog
"""

from typing import Any, Dict, List, Optional
import structlog
import httpx

from core.config import Settings
from core.exceptions import NotFoundError, RecipeGatewayError
from schemas.recipe_schemas import CatalogRecipe

logger = structlog.get_logger()


class RecipeGateway:
    """Client for the external recipe catalog"""

    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecipeGateway":
        return cls(base_url=settings.RECIPE_API_URL, timeout=settings.RECIPE_API_TIMEOUT)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_meals(self, endpoint: str, params: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
        """Call a catalog endpoint and return its ``meals`` array (None when empty)"""
        try:
            response = await self.client.get(f"{self.base_url}/{endpoint}", params=params)
            response.raise_for_status()
            return response.json().get("meals")

        except httpx.RequestError as e:
            logger.error("Recipe catalog request failed", endpoint=endpoint, error=str(e))
            raise RecipeGatewayError(f"Recipe service unavailable: {str(e)}")
        except httpx.HTTPStatusError as e:
            logger.error("Recipe catalog returned error", endpoint=endpoint, status=e.response.status_code)
            raise RecipeGatewayError(f"Recipe service error: {e.response.status_code}")
        except ValueError as e:
            logger.error("Recipe catalog returned invalid JSON", endpoint=endpoint, error=str(e))
            raise RecipeGatewayError("Recipe service returned an invalid response")

    @staticmethod
    def _to_recipe(meal: Dict[str, Any]) -> CatalogRecipe:
        return CatalogRecipe(
            id=int(meal["idMeal"]),
            name=meal["strMeal"],
            category=meal.get("strCategory"),
            area=meal.get("strArea"),
            image=meal.get("strMealThumb"),
            instruction=meal.get("strInstructions"),
        )

    async def get_random(self) -> CatalogRecipe:
        """Get a single random recipe"""
        meals = await self._get_meals("random.php", {})
        if not meals:
            raise NotFoundError("No recipe returned by catalog")
        return self._to_recipe(meals[0])

    async def get_categories(self) -> List[str]:
        """List category names"""
        meals = await self._get_meals("list.php", {"c": "list"})
        if not meals:
            raise NotFoundError("No categories returned by catalog")
        return [meal["strCategory"] for meal in meals]

    async def get_areas(self) -> List[str]:
        """List area (cuisine) names"""
        meals = await self._get_meals("list.php", {"a": "list"})
        if not meals:
            raise NotFoundError("No areas returned by catalog")
        return [meal["strArea"] for meal in meals]

    async def get_by_id(self, recipe_id: int) -> CatalogRecipe:
        """Look up one recipe by its catalog id"""
        meals = await self._get_meals("lookup.php", {"i": recipe_id})
        if not meals:
            raise NotFoundError(f"No recipe: {recipe_id}")
        return self._to_recipe(meals[0])

    async def get_by_category(self, category: str) -> List[Dict[str, Any]]:
        """Filter recipes by category"""
        meals = await self._get_meals("filter.php", {"c": category})
        if not meals:
            raise NotFoundError(f"No recipes in category: {category}")
        return meals

    async def get_by_area(self, area: str) -> List[Dict[str, Any]]:
        """Filter recipes by area"""
        meals = await self._get_meals("filter.php", {"a": area})
        if not meals:
            raise NotFoundError(f"No recipes in area: {area}")
        return meals

    async def get_by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        """Filter recipes by main ingredient; an unknown ingredient yields an empty list"""
        meals = await self._get_meals("filter.php", {"i": ingredient})
        return meals or []
