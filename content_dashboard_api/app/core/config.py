"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with an in-memory store and no extra setup.  In a
production deployment you should override these via environment
variables (for example ``STORE_BACKEND=sqlite``).
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Content Dashboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Which entity store backs the API: ``memory`` keeps records for the
    # lifetime of the process, ``sqlite`` persists them to
    # ``database_url``.
    store_backend: str = os.getenv("STORE_BACKEND", "memory")

    # Path to the SQLite database file.  If a relative path is provided,
    # it will be resolved relative to the project root by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "content_dashboard.db")

    # Gallery uploads are written to ``upload_dir`` and served under
    # ``/uploads``.  ``public_base_url`` is prepended to build the URL
    # stored on the gallery record.
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    # Comma-separated list of origins allowed to call the API from a
    # browser, e.g. CORS_ORIGINS="http://localhost:5173".
    cors_origins: str = os.getenv("CORS_ORIGINS", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
