"""
RecipeBox Core Dependencies
FastAPI dependencies for authentication, authorization, and service wiring
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from functools import lru_cache
from typing import Optional, Annotated
import structlog

from core.config import get_settings
from core.database import get_db
from core.exceptions import ForbiddenError, UnauthorizedError
from schemas.auth_schemas import TokenClaims
from services.account_service import AccountService
from services.auth_service import InvalidTokenError, PasswordHasher, TokenCodec
from services.recipe_gateway import RecipeGateway

logger = structlog.get_logger()

# Security scheme
security = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide password hasher built from settings once"""
    return PasswordHasher.from_settings(get_settings())


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide token codec; the signing secret is read once at startup"""
    return TokenCodec.from_settings(get_settings())


@lru_cache
def get_recipe_gateway() -> RecipeGateway:
    """Shared recipe catalog client, closed on application shutdown"""
    return RecipeGateway.from_settings(get_settings())


def get_account_service(
    hasher: PasswordHasher = Depends(get_password_hasher)
) -> AccountService:
    return AccountService(hasher)


async def get_token_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    codec: TokenCodec = Depends(get_token_codec)
) -> Optional[TokenClaims]:
    """
    Identity from the bearer token, or None when no token was sent

    Raises:
        UnauthorizedError: if a token was sent but is forged or expired
    """
    if not credentials:
        return None

    try:
        return codec.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Token verification failed", error=str(e))
        raise UnauthorizedError("Invalid or expired token")


def require_logged_in(
    claims: Optional[TokenClaims] = Depends(get_token_claims)
) -> TokenClaims:
    """Dependency for routes that need any valid token"""
    if claims is None:
        raise UnauthorizedError("Authentication required")
    return claims


def require_admin(claims: TokenClaims = Depends(require_logged_in)) -> TokenClaims:
    """Dependency for admin-only endpoints"""
    if not claims.is_admin:
        raise ForbiddenError("Admin access required")
    return claims


def require_self_or_admin(
    username: str,
    claims: TokenClaims = Depends(require_logged_in)
) -> TokenClaims:
    """Dependency for routes scoped to the ``username`` path parameter"""
    if claims.username != username and not claims.is_admin:
        logger.warning(
            "Access to another user's data denied",
            requester=claims.username,
            target=username
        )
        raise ForbiddenError("Only the account owner or an admin may do this")
    return claims


# Type aliases for common dependencies
DBSession = Annotated[AsyncSession, Depends(get_db)]
Accounts = Annotated[AccountService, Depends(get_account_service)]
Recipes = Annotated[RecipeGateway, Depends(get_recipe_gateway)]
Tokens = Annotated[TokenCodec, Depends(get_token_codec)]

# Route guards; each route declares exactly one
LoggedIn = Depends(require_logged_in)
AdminOnly = Depends(require_admin)
SelfOrAdmin = Depends(require_self_or_admin)

# Claims of a request that already passed SelfOrAdmin; resolved once per request
SelfOrAdminClaims = Annotated[TokenClaims, SelfOrAdmin]
