"""
AirSense configuration.

Every setting comes from the environment (or a ``.env`` file) and has a
default suitable for local development against PostgreSQL.
"""

import os
from typing import List, Optional, Tuple, Union

from pydantic import ConfigDict, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Settings shared by the API and the viewer.

    Names are case sensitive and match the environment variables.
    """

    # API
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "AirSense API"
    VERSION: str = "2.0.0"
    DEBUG: bool = False

    # Comma-separated list, "*" for any origin. Kept as a plain string in the
    # environment so pydantic-settings does not try to parse it as JSON.
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "*"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Union[None, str, List[str]]) -> List[str]:
        if not v:
            return []
        if isinstance(v, list):
            return v
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "airsense"
    POSTGRES_PASSWORD: str = "airsense"
    POSTGRES_DB: str = "airsense"
    POSTGRES_PORT: int = 5432
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def resolve_database_url(cls, v: Optional[str], info: ValidationInfo) -> str:
        """
        Pick the database URL.

        An explicit URI wins, then a hosting-provided ``DATABASE_URL``; otherwise
        the URL is built from the POSTGRES_* parts. A POSTGRES_DB ending in
        ``.db`` selects a local SQLite file.
        """
        if v:
            return v

        hosted = os.getenv("DATABASE_URL")
        if hosted:
            for scheme in ("postgres://", "postgresql://"):
                if hosted.startswith(scheme):
                    return "postgresql+asyncpg://" + hosted[len(scheme):]
            return hosted

        parts = info.data
        name = parts.get("POSTGRES_DB")
        if name and name.endswith(".db"):
            return f"sqlite+aiosqlite:///{name}"

        return "postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}".format(
            user=parts.get("POSTGRES_USER"),
            password=parts.get("POSTGRES_PASSWORD"),
            host=parts.get("POSTGRES_SERVER"),
            port=parts.get("POSTGRES_PORT"),
            name=name,
        )

    # Supported year domain of the historical dataset
    YEAR_MIN: int = 2011
    YEAR_MAX: int = 2023

    # Health check (cron keep-alive)
    HEALTH_CHECK_SECRET: str = ""

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW: int = 60  # seconds

    # Redis Configuration (Optional)
    REDIS_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0
    CACHE_TTL_REFERENCE: int = 3600  # municipalities and dictionary rarely change

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Viewer
    VIEWER_API_BASE_URL: str = "http://localhost:8000/api"
    VIEWER_DEFAULT_CENTER: Tuple[float, float] = (4.0, -76.55)
    VIEWER_DEFAULT_ZOOM: float = 8.5
    VIEWER_AUTO_SELECT_DELAY: float = 0.5  # seconds
    VIEWER_REQUEST_TIMEOUT: float = 15.0

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def rate_limit(self) -> str:
        """Default slowapi limit string for data endpoints."""
        return f"{self.RATE_LIMIT_REQUESTS}/{self.RATE_LIMIT_WINDOW}seconds"


# Create global settings instance
settings = Settings()
