"""
Main entrypoint for the Content Dashboard API.

This module assembles the FastAPI application, sets up logging,
constructs the entity store and file storage, registers the envelope
exception handlers and includes the API router under ``/api``.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn content_dashboard_api.app.main:app --reload

Tests call ``create_app`` directly with their own settings and store.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.error_handlers import register_exception_handlers
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path
from .core.logging_config import setup_logging
from .services.entity_store import EntityStore, InMemoryEntityStore
from .services.file_storage import UPLOADS_ROUTE, LocalFileStorage
from .services.sqlite_store import SqliteEntityStore


logger = logging.getLogger(__name__)


def build_store(config: Settings) -> EntityStore:
    """Construct the entity store selected by ``config.store_backend``."""
    backend = config.store_backend.lower()
    if backend == "memory":
        return InMemoryEntityStore()
    if backend == "sqlite":
        return SqliteEntityStore(get_database_path(config.database_url))
    raise ValueError(f"Unknown STORE_BACKEND {config.store_backend!r}; expected 'memory' or 'sqlite'")


def create_app(
    config: Optional[Settings] = None,
    store: Optional[EntityStore] = None,
    file_storage: Optional[LocalFileStorage] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use; defaults to the module-level ``settings``.
    store : Optional[EntityStore]
        Entity store to serve from.  When omitted one is built from
        ``config.store_backend``.
    file_storage : Optional[LocalFileStorage]
        Storage for gallery uploads.  When omitted it writes to
        ``config.upload_dir``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Initialise logging before anything else so that the store
    # construction below can log.
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version, debug=config.debug)

    app.state.settings = config
    app.state.store = store if store is not None else build_store(config)
    app.state.file_storage = file_storage or LocalFileStorage(
        config.upload_dir, config.public_base_url, config.max_upload_bytes
    )
    logger.info("Serving content from %s", type(app.state.store).__name__)

    if config.cors_origin_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origin_list,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    upload_dir = str(app.state.file_storage.upload_dir)
    os.makedirs(upload_dir, exist_ok=True)
    app.mount(UPLOADS_ROUTE, StaticFiles(directory=upload_dir), name="uploads")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
