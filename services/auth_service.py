"""
RecipeBox Authentication Service
Password hashing and signed, expiring bearer tokens
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
import structlog

from core.config import Settings
from schemas.auth_schemas import TokenClaims

logger = structlog.get_logger()


class InvalidTokenError(Exception):
    """Token is forged, expired or malformed"""
    pass


class PasswordHasher:
    """Salted, cost-parameterized one-way password hashing"""

    def __init__(self, work_factor: int):
        self.work_factor = work_factor
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=work_factor
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(work_factor=settings.BCRYPT_WORK_FACTOR)

    def hash(self, plaintext: str) -> str:
        """Hash a password"""
        return self.pwd_context.hash(plaintext)

    def verify(self, plaintext: str, stored_hash: Optional[str]) -> bool:
        """Verify a password against its hash; a malformed hash never matches"""
        if not stored_hash:
            return False
        try:
            return self.pwd_context.verify(plaintext, stored_hash)
        except (ValueError, TypeError) as e:
            logger.warning("Stored password hash could not be verified", error=str(e))
            return False


class TokenCodec:
    """Issues and verifies signed identity tokens carrying {username, isAdmin}"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )

    def issue(
        self,
        claims: TokenClaims,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a signed token for the given identity"""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))

        to_encode: Dict[str, Any] = claims.model_dump(by_alias=True)
        to_encode.update({
            "iat": now,
            "exp": expire,
        })

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the identity

        Raises:
            InvalidTokenError: for any problem; expired and forged tokens are
            indistinguishable to the caller
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as e:
            raise InvalidTokenError(f"Invalid token: {str(e)}")
