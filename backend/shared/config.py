"""
Centralized configuration for the Floe backend.

All settings are loaded from environment variables (prefixed with FLOE_)
with sensible defaults. A .env file in the working directory is also read.
"""

import logging
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FLOE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Floe API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Authorization", "Content-Type", "X-CSRF-Token"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    database_url: str = ""  # direct Postgres URI, used by run_migrations.py
    database_timeout: int = 10  # seconds

    # Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_expiry: int = 15 * 60  # seconds
    refresh_token_expiry: int = 7 * 24 * 60 * 60  # seconds
    rotate_refresh_tokens: bool = False
    admin_email: str = "admin@floe.cms"
    admin_password: str = "adminpassword"
    password_min_length: int = 8
    bcrypt_rounds: int = 12


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def resolve_jwt_secret(settings: Settings) -> str:
    """
    Return the configured JWT signing secret, generating one if unset.

    A generated secret lives only as long as the process: every access
    token issued with it becomes invalid after a restart. Call this once
    at startup and pass the result to the token signer.
    """
    if settings.jwt_secret:
        return settings.jwt_secret

    logger.warning(
        "FLOE_JWT_SECRET is not set; generated a random signing secret. "
        "Access tokens will not survive a restart."
    )
    return secrets.token_urlsafe(32)
