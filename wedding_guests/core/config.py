"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
admin client works against a backend on ``localhost:8000`` without any
setup.  Client and development backend share the same settings object;
fields that only one side uses are grouped below.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _optional_float(value: str) -> Optional[float]:
    """Parse a float from an environment value; empty means ``None``."""
    value = value.strip()
    if not value:
        return None
    return float(value)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # ------------------------------------------------------------------
    # Client
    # ------------------------------------------------------------------
    # Base URL of the guest list backend.  This is the only option the
    # admin client strictly needs.
    backend_url: str = os.getenv("GUEST_LIST_BACKEND_URL", "http://localhost:8000")

    # File acting as durable client storage for the session token.  The
    # token lives in a JSON object under ``token_key``.
    token_file: str = os.getenv(
        "GUEST_LIST_TOKEN_FILE",
        str(Path.home() / ".wedding_guests" / "storage.json"),
    )
    token_key: str = os.getenv("GUEST_LIST_TOKEN_KEY", "authToken")

    # Scope value sent along with every login request.
    login_scope: str = os.getenv("GUEST_LIST_LOGIN_SCOPE", "noivo convidado")

    # Per-request timeout in seconds.  Unset means requests wait until
    # the transport gives up.
    request_timeout: Optional[float] = field(
        default_factory=lambda: _optional_float(os.getenv("GUEST_LIST_REQUEST_TIMEOUT", ""))
    )

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # ------------------------------------------------------------------
    # Development backend
    # ------------------------------------------------------------------
    project_name: str = os.getenv("PROJECT_NAME", "Wedding Guest List API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "wedding_guests.db")

    # Admin account seeded on startup when it does not exist yet.  Leave
    # the password empty to skip seeding.
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
