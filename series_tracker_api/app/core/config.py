"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start locally without any setup; in a container you should
override them via environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Series Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Which persistence backend to use: ``sqlite`` (default) or
    # ``memory``.  The in-memory backend loses all data on restart and
    # is intended for demos and tests.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the current working directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "series_tracker.db")

    # Seconds a connection waits on a locked database before failing.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5"))

    # All series routes are mounted below this prefix.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Comma-separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Seconds to wait for in-flight requests when the server is asked
    # to stop.
    shutdown_timeout: int = int(os.getenv("SHUTDOWN_TIMEOUT", "15"))

    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
