"""
Centralized configuration for the Residence Portal backend.

All settings are loaded from environment variables with sensible defaults.
Variables are namespaced with the PORTAL_ prefix (e.g., PORTAL_SUPABASE_URL).
"""

from functools import lru_cache
from typing import Literal
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PORTAL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Residence Portal API"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production", "test"] = "production"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Uploads (files live in external object storage, only metadata passes through)
    uploads_folder: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Pagination
    default_page_size: int = 100
    max_page_size: int = 500

    # Storage / identity backend: "supabase" in deployments, "memory" for tests and local demos
    backend: Literal["supabase", "memory"] = "supabase"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""

    # Local development escape hatch: trust tokens carrying this prefix
    dev_token_bypass: bool = False
    dev_token_prefix: str = "simulated_token_"

    @model_validator(mode="after")
    def _check_dev_bypass(self) -> "Settings":
        if self.dev_token_bypass and self.environment != "development":
            raise ValueError(
                "dev_token_bypass may only be enabled when environment is "
                f"'development' (got '{self.environment}')"
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def dev_bypass_active(self) -> bool:
        """True only when both the flag and development mode are set."""
        return self.dev_token_bypass and self.is_development


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
