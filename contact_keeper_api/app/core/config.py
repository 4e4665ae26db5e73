"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with no configuration at all; in a production deployment
override at least ``SECRET_KEY`` and ``DATABASE_URL``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Contact Keeper API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    # 6000 minutes matches the 360000 second lifetime tokens always had.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "6000"))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Header that carries the access token.  ``Authorization: Bearer``
    # is accepted as well when this header is absent.
    auth_header: str = os.getenv("AUTH_HEADER", "x-auth-token")

    # Status returned when a caller touches a contact owned by someone
    # else.  Clients written against the first version of the API expect
    # 401; set to 403 for the stricter HTTP reading.
    ownership_denied_status: int = int(os.getenv("OWNERSHIP_DENIED_STATUS", "401"))

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "contact_keeper.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
