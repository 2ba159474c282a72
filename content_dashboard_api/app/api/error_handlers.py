"""
Exception handlers that keep every failure inside the envelope.

``register_exception_handlers`` installs handlers for the dashboard's
own error taxonomy, for FastAPI's request validation errors (malformed
JSON, bad query values), for Starlette HTTP errors such as unknown
routes, and a last-resort handler for anything unexpected.  No handler
leaks internal detail; unexpected errors are logged with traceback.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from content_dashboard_api.app.api.responses import fail
from content_dashboard_api.app.core.errors import DashboardError, ValidationError
from content_dashboard_api.app.services.validation import format_errors


logger = logging.getLogger(__name__)


async def dashboard_error_handler(request: Request, exc: DashboardError):
    errors = exc.errors if isinstance(exc, ValidationError) else None
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return fail(exc.status_code, exc.message, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return fail(status.HTTP_400_BAD_REQUEST, "Invalid request data", format_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = fail(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return fail(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
