# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   print(get_settings().DATABASE_PATH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, so a missing secret
# stops the process before it serves anything.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Read through get_settings(), or passed explicitly to
    app.main.create_app() (tests do this).
    """

    # -------------------------------------------------------------------------
    # Secrets
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    JWT_SECRET: str = Field(
        ...,
        min_length=1,
        description="Secret used to sign and verify session tokens"
    )

    WEBHOOK_API_KEY: str = Field(
        ...,
        min_length=1,
        description="Shared key the payment provider sends as 'Authorization: ApiKey <key>'"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    DATABASE_PATH: str = Field(
        default="database.json",
        description="Location of the JSON database document"
    )

    RESET_DATABASE_ON_START: bool = Field(
        default=False,
        description="Wipe the database at startup (development only)"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    BCRYPT_ROUNDS: int = Field(
        default=12,
        ge=4,
        le=16,
        description="bcrypt work factor for password hashing"
    )

    TOKEN_ISSUER: str = Field(
        default="chirpy",
        min_length=1,
        description="Issuer claim placed in and required on session tokens"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, /admin/reset)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty variables as unset, so JWT_SECRET="" is still "missing"
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def reset_allowed(self) -> bool:
        """The reset endpoint only works in debug mode outside production."""
        return self.DEBUG and not self.is_production


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
