"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./dev.db"

    # App settings
    app_name: str = "Best Corporate Real Estate"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # JWT Configuration
    jwt_secret_key: str = "CHANGE-ME-IN-PRODUCTION-USE-LONG-RANDOM-STRING"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 24 * 60

    # Back-office account (password may be a bcrypt hash starting with "$2")
    admin_username: str = "admin"
    admin_password: str = "change-me"
    admin_email: str = "admin@example.com"

    # Lease applications
    application_fee_cents: int = 5000

    # Root that stored document paths (e.g. /docs/financials.pdf) resolve under
    public_dir: str = "public"

    # Map fallback when a listing has no usable coordinates (Columbus, OH)
    default_latitude: float = 39.9612
    default_longitude: float = -83.0007

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
