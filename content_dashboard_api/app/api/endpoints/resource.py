"""
Router factory for status-bearing resources.

Blogs and projects expose the same five operations (list with an
optional status filter, get, create, partial update, delete), so their
routers are built here from the dependency that supplies the bound
``ResourceService``.  Handlers only translate between HTTP and the
service; validation, not-found and store failures are raised by the
service and rendered by the application's exception handlers.
"""

from typing import Any, Callable, List, Optional, Type

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel

from content_dashboard_api.app.api.responses import ok
from content_dashboard_api.app.core.errors import ValidationError
from content_dashboard_api.app.schemas.common import Envelope, PublishStatus
from content_dashboard_api.app.services.resource_service import ResourceService


def parse_status_filter(value: Optional[str]) -> Optional[str]:
    """Turn the ``status`` query value into a filter.

    A missing or blank value means no filtering.
    """
    if value is None or not value.strip():
        return None
    try:
        return PublishStatus(value).value
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in PublishStatus)
        raise ValidationError(
            "Invalid request data",
            [{"path": ["query", "status"], "message": f"Input should be {allowed}", "code": "enum"}],
        ) from None


def build_resource_router(
    get_service: Callable[..., ResourceService],
    read_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()

    @router.get("", response_model=Envelope[List[read_schema]])
    async def list_resources(
        status_filter: Optional[str] = Query(None, alias="status"),
        service: ResourceService = Depends(get_service),
    ):
        """List records, optionally only those with the given status.

        No ordering is guaranteed beyond insertion order.
        """
        items = await service.list(parse_status_filter(status_filter))
        return ok(items)

    @router.get("/{entity_id}", response_model=Envelope[read_schema])
    async def get_resource(entity_id: str, service: ResourceService = Depends(get_service)):
        """Retrieve a single record; 404 if it does not exist."""
        return ok(await service.get(entity_id))

    @router.post("", response_model=Envelope[read_schema], status_code=status.HTTP_201_CREATED)
    async def create_resource(
        payload: Any = Body(...),
        service: ResourceService = Depends(get_service),
    ):
        """Create a record from a full payload.

        ``id`` and timestamps are assigned by the store; if sent they
        are ignored.
        """
        created = await service.create(payload)
        return ok(created, status_code=status.HTTP_201_CREATED)

    @router.put("/{entity_id}", response_model=Envelope[read_schema])
    async def update_resource(
        entity_id: str,
        payload: Any = Body(...),
        service: ResourceService = Depends(get_service),
    ):
        """Apply a partial update.

        Only the fields present in the payload change.  Moving between
        ``draft`` and ``published`` is allowed in both directions; the
        caller sets or clears ``publishedAt`` itself.
        """
        return ok(await service.update(entity_id, payload))

    @router.delete("/{entity_id}", response_model=Envelope)
    async def delete_resource(entity_id: str, service: ResourceService = Depends(get_service)):
        """Delete a record; repeating the call answers 404."""
        return ok(message=await service.delete(entity_id))

    return router
