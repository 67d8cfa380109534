"""
RecipeBox Recipe Schemas
Catalog recipes, saved snapshots and user-authored recipes
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CatalogRecipe(BaseModel):
    """A single recipe as returned by the external catalog, normalised"""
    id: int
    name: str
    category: Optional[str] = None
    area: Optional[str] = None
    image: Optional[str] = None
    instruction: Optional[str] = None


class SavedRecipe(BaseModel):
    """Saved catalog recipe entry"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    recipe_id: int = Field(alias="recipeId")
    name: str
    category: Optional[str] = None
    area: Optional[str] = None


class AuthoredRecipeNew(BaseModel):
    """Schema for authoring a recipe"""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    ingredients: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)


class AuthoredRecipeSummary(BaseModel):
    """Authored recipe as listed on a profile"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class AuthoredRecipe(AuthoredRecipeSummary):
    """Full authored recipe"""
    ingredients: str
    instructions: str
    username: str
