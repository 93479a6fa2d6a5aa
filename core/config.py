"""
Application configuration loaded from environment variables.
Uses pydantic-settings with python-dotenv for .env file loading.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values
    """

    # Database configuration
    # DATABASE_URL, when set, wins over the DB_* parts below
    DATABASE_URL_OVERRIDE: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    RUNNING_IN_DOCKER: bool = False
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_DATABASE: str = "petbnb"
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 5
    DB_POOL_RECYCLE: int = 30

    # Mapbox configuration
    MAPBOX_TOKEN: str = ""
    MAPBOX_GEOCODING_URL: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    GEOCODE_TIMEOUT: float = 10.0
    GEOCODE_LIMIT: int = 5
    GEOCODE_TYPES: str = "place,locality,neighborhood"
    GEOCODE_MAX_RETRIES: int = 3  # retries after the first attempt

    # Search defaults (Seattle downtown)
    DEFAULT_SEARCH_RADIUS_KM: float = 10.0
    DEFAULT_NEARBY_KM: float = 5.0
    DEFAULT_LONGITUDE: float = -122.3321
    DEFAULT_LATITUDE: float = 47.6062

    # Tag generation
    MAX_SITTER_TAGS: int = 4

    # Images
    PLACEHOLDER_IMAGE_URL: str = "https://via.placeholder.com/{width}x{height}/cccccc/666666?text=Pet+Sitter"

    # API configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3001

    @property
    def DATABASE_URL(self) -> str:
        """Construct PostgreSQL database URL for SQLAlchemy."""
        if self.DATABASE_URL_OVERRIDE:
            url = self.DATABASE_URL_OVERRIDE
            # Compose service names do not resolve outside the container network
            if not self.RUNNING_IN_DOCKER and "@postgres:" in url:
                url = url.replace("@postgres:", "@localhost:")
            if url.startswith("postgres://"):
                url = "postgresql+psycopg2://" + url[len("postgres://"):]
            return url

        host = self.DB_HOST or ("postgres" if self.RUNNING_IN_DOCKER else "localhost")
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{host}:{self.DB_PORT}/{self.DB_DATABASE}"
        )

    def has_mapbox_token(self) -> bool:
        """Check if a Mapbox access token is configured."""
        return bool(self.MAPBOX_TOKEN and self.MAPBOX_TOKEN.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
