"""
Blog Backend — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Passed to the application factory; imported by Alembic and the CLI entry point.
When:  Loaded once at module import time; tests build their own instances.

Every value has a development default, so the server starts with no
environment at all: it serves on 127.0.0.1:8000 and keeps its data in ./main.db.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path> (file) or sqlite+aiosqlite:// (in-memory)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./main.db",
        description="Async SQLite connection URL"
    )

    # Validates pooled connections before use
    db_pool_pre_ping: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, or "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

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

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only SQLite URLs are accepted; the schema relies on SQLite semantics."""
        if make_url(v).get_backend_name() != "sqlite":
            raise ValueError(f"Unsupported database_url '{v}'. Expected a sqlite URL.")
        return v

    @property
    def database_path(self) -> Optional[Path]:
        """
        What: The SQLite file behind `database_url`.
        Returns None for in-memory databases (no file to check or create).
        """
        database = make_url(self.database_url).database
        if not database or database == ":memory:":
            return None
        return Path(database)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Default instance used by `blog.main:app`, the CLI and Alembic
settings = Settings()
