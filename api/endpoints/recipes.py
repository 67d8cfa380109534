"""
RecipeBox Recipe Catalog Endpoints
Public pass-through to the external recipe catalog
"""

from fastapi import APIRouter

from core.dependencies import Recipes

router = APIRouter()


@router.get("/random")
async def get_random_recipe(gateway: Recipes):
    """Get a random recipe"""
    recipe = await gateway.get_random()
    return {"recipe": recipe}


@router.get("/categories")
async def get_categories(gateway: Recipes):
    """List of category names"""
    categories = await gateway.get_categories()
    return {"categories": categories}


@router.get("/area")
async def get_areas(gateway: Recipes):
    """List of area names"""
    area = await gateway.get_areas()
    return {"area": area}


@router.get("/categories/{category}")
async def get_recipes_by_category(category: str, gateway: Recipes):
    recipes = await gateway.get_by_category(category)
    return {"recipes": recipes}


@router.get("/area/{area}")
async def get_recipes_by_area(area: str, gateway: Recipes):
    recipes = await gateway.get_by_area(area)
    return {"recipes": recipes}


@router.get("/ingredient/{ingredient}")
async def get_recipes_by_ingredient(ingredient: str, gateway: Recipes):
    recipes = await gateway.get_by_ingredient(ingredient)
    return {"recipes": recipes}


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: int, gateway: Recipes):
    """Get a specific recipe by catalog id"""
    recipe = await gateway.get_by_id(recipe_id)
    return {"recipe": recipe}
