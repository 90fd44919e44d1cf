"""
Scancodes — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that run the packaged blueprint out of the box.
    """

    # ── Blueprint ─────────────────────────────────────────────────────────
    # What: Filesystem path of a blueprint to use instead of the packaged one
    # Format: Absolute or CWD-relative path to a UTF-8 JSON file
    blueprint_path: Optional[str] = Field(
        default=None,
        description="Override for scancodes/resources/blueprint_default.json",
    )

    # What: Template used by GET /code/{id} when ?template= is omitted
    default_template: str = Field(default="template0001style1")

    # ── Scanning ──────────────────────────────────────────────────────────
    # What: Mounts POST /scan; disabled deployments only render and list
    scan_enabled: bool = Field(default=True)

    # What: Largest upload accepted by POST /scan, in bytes
    # Default: 10MB; larger uploads are answered with "N/A"
    max_upload_size: int = Field(default=10_485_760, ge=1024, le=52_428_800)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported throughout the application
settings = Settings()
