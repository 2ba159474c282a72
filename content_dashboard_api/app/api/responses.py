"""
Builders for the uniform response envelope.

Every endpoint answers with ``{"success": ..., "data"?, "message"?,
"errors"?}``.  Keys that do not apply are omitted rather than sent as
``null``; an empty list is still sent as ``data``.
"""

from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


_MISSING = object()


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return value


def envelope(
    success: bool,
    *,
    data: Any = _MISSING,
    message: Optional[str] = None,
    errors: Optional[List[Dict[str, Any]]] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": success}
    if data is not _MISSING:
        body["data"] = _dump(data)
    if message is not None:
        body["message"] = message
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def ok(data: Any = _MISSING, *, message: Optional[str] = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return envelope(True, data=data, message=message, status_code=status_code)


def fail(
    status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None
) -> JSONResponse:
    return envelope(False, message=message, errors=errors, status_code=status_code)
