"""
RecipeBox Database Models
Central import module for all database models
"""

from .users import User
from .recipes import SavedRecipe, AuthoredRecipe

__all__ = [
    "User",
    "SavedRecipe",
    "AuthoredRecipe",
]
