"""
RecipeBox User Schemas
Pydantic models for user management requests and responses
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from schemas.recipe_schemas import SavedRecipe, AuthoredRecipeSummary


class UserNew(BaseModel):
    """Schema for admin-created users; the new user may be an admin"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=30)
    email: EmailStr = Field(..., min_length=6, max_length=60)
    is_admin: bool = Field(default=False, alias="isAdmin")


class UserUpdate(BaseModel):
    """Schema for partial user updates; unknown fields are rejected"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=20)
    email: Optional[EmailStr] = Field(None, min_length=6, max_length=60)
    is_admin: Optional[bool] = Field(None, alias="isAdmin")

    def to_update_data(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent, keyed by their wire names"""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class UserPublic(BaseModel):
    """User projection safe to return; carries no password"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    username: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    is_admin: bool = Field(alias="isAdmin")


class UserDetail(UserPublic):
    """User with their saved and authored recipes"""
    saved_recipes: List[SavedRecipe] = Field(default_factory=list, alias="savedRecipes")
    authored_recipes: List[AuthoredRecipeSummary] = Field(default_factory=list, alias="authoredRecipes")
