"""
RecipeBox Configuration Settings
Manages all application configuration with environment-based overrides
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "RecipeBox"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    VERSION: str = "1.0.0"

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3001)

    # Security
    SECRET_KEY: str = Field(default="secret-dev")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)
    BCRYPT_WORK_FACTOR: int = Field(default=12)

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )
    ALLOWED_HOSTS: List[str] = Field(default=["localhost", "127.0.0.1"])

    # Database
    DATABASE_URL: str = Field(default="postgresql://localhost/recipe")
    DATABASE_POOL_SIZE: int = Field(default=10)
    DATABASE_MAX_OVERFLOW: int = Field(default=20)
    DATABASE_POOL_TIMEOUT: int = Field(default=30)

    # External recipe catalog
    RECIPE_API_URL: str = Field(default="https://www.themealdb.com/api/json/v1/1")
    RECIPE_API_TIMEOUT: float = Field(default=10.0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_test(self) -> bool:
        return self.ENVIRONMENT == "test"

    @property
    def database_url_async(self) -> str:
        """Convert sync database URL to its async driver form"""
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


# Environment-specific configurations
if settings.is_production:
    settings.DEBUG = False
    settings.LOG_LEVEL = "WARNING"
    settings.DATABASE_POOL_SIZE = 20

elif settings.is_development:
    settings.DEBUG = True
    settings.LOG_LEVEL = "DEBUG"
    settings.DATABASE_POOL_SIZE = 5

elif settings.is_test:
    # bcrypt's minimum cost keeps the test suite fast
    settings.BCRYPT_WORK_FACTOR = 4
    settings.DATABASE_URL = "sqlite://"
