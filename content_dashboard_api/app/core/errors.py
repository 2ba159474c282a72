"""
Exception taxonomy for the content dashboard.

Every error raised deliberately by the store or the resource services
derives from ``DashboardError`` and carries the HTTP status it maps to
and a message that is safe to show to API clients.  The handlers in
``api/error_handlers.py`` turn these into the response envelope.
"""

from typing import Any, Dict, List, Optional


class DashboardError(Exception):
    """Base class for errors surfaced through the API envelope."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    """A payload failed schema constraints.

    ``errors`` holds one ``{"path", "message", "code"}`` item per
    violated constraint.
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(DashboardError):
    """The referenced identifier does not exist for its kind."""

    status_code = 404


class StoreFailure(DashboardError):
    """The underlying persistence operation failed unexpectedly.

    The message is generic; details belong in the server log only.
    """

    status_code = 500


class UnsupportedOperation(DashboardError):
    """The resource does not support the requested operation."""

    status_code = 405
