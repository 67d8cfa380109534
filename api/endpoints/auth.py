"""
RecipeBox Authentication Endpoints
Token issue for existing users and self-service registration
"""

from fastapi import APIRouter, status
import structlog

from core.dependencies import Accounts, DBSession, Tokens
from schemas.auth_schemas import TokenClaims, TokenRequest, TokenResponse, UserRegister

logger = structlog.get_logger()
router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def login(payload: TokenRequest, db: DBSession, accounts: Accounts, tokens: Tokens):
    """
    Exchange username and password for a bearer token

    Unknown users and wrong passwords get the same 401.
    """
    user = await accounts.authenticate(db, payload.username, payload.password)
    token = tokens.issue(TokenClaims(username=user.username, is_admin=user.is_admin))
    logger.info("Token issued", username=user.username)
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, db: DBSession, accounts: Accounts, tokens: Tokens):
    """Register a new, non-admin user and return a token for them"""
    user = await accounts.register(db, **payload.model_dump(), is_admin=False)
    token = tokens.issue(TokenClaims(username=user.username, is_admin=user.is_admin))
    return TokenResponse(token=token)
