"""
Configuration management for the Asset Warehouse API.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    PROJECT_NAME: str = "Asset Warehouse"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "https://assetwarehouse.vercel.app",
    ]

    # Database (PostgreSQL)
    DATABASE_URL: str | None = None
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # TLS trust for the database connection: inline PEM text wins over the bundle file
    DATABASE_SSL_CA: str | None = None
    DATABASE_SSL_CA_FILE: str | None = None

    # SQLite fallback for local development (used when DATABASE_URL is unset)
    USE_SQLITE_FALLBACK: bool = True
    SQLITE_FALLBACK_URL: str = "sqlite+aiosqlite:///./warehouse_dev.db"

    # Object storage (DigitalOcean Spaces / any S3-compatible service)
    SPACES_ENDPOINT_URL: str = "https://nyc3.digitaloceanspaces.com"
    SPACES_ACCESS_KEY: str | None = None
    SPACES_SECRET: str | None = None
    SPACES_BUCKET_NAME: str = "asset-warehouse"
    SPACES_REGION: str = "us-east-1"
    PRESIGNED_URL_EXPIRES: int = 60  # seconds

    # Sessions
    SESSION_COOKIE_NAME: str = "awsid"
    SESSION_LIFETIME_DAYS: int = 7

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
