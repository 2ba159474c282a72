"""Entry point for the Content Dashboard API.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as STORE_BACKEND, DATABASE_URL, UPLOAD_DIR and
PUBLIC_BASE_URL is read from environment variables; see
``content_dashboard_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from content_dashboard_api.app.core.config import settings
from content_dashboard_api.app.main import app


async def main() -> None:
    """Start the API using Uvicorn.

    Host and port are read from the ``HOST`` and ``PORT`` environment
    variables via settings.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")
