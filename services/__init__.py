"""
RecipeBox Services Module
Account store, credentials and the recipe catalog client
"""

from .auth_service import PasswordHasher, TokenCodec, InvalidTokenError
from .recipe_gateway import RecipeGateway
from .account_service import AccountService

__all__ = [
    # Credentials
    "PasswordHasher",
    "TokenCodec",
    "InvalidTokenError",

    # Recipe catalog
    "RecipeGateway",

    # Account store
    "AccountService",
]
