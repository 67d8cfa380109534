"""
RecipeBox API Endpoints
All API endpoint modules
"""

from . import health, auth, users, recipes

__all__ = [
    "health",
    "auth",
    "users",
    "recipes",
]
