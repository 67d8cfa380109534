"""
RecipeBox Authentication Schemas
Pydantic models for authentication requests and responses
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TokenRequest(BaseModel):
    """Schema for exchanging credentials for a token"""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=20)


class UserRegister(BaseModel):
    """Schema for self-service registration; never grants admin"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=30)
    email: EmailStr = Field(..., min_length=6, max_length=60)


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    token: str


class TokenClaims(BaseModel):
    """Identity carried inside a bearer token"""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    is_admin: bool = Field(default=False, alias="isAdmin")
