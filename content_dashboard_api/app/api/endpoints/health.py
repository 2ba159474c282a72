"""
Health check endpoint.

Reports that the API is up together with the number of stored records
per entity kind.  If the store cannot be queried the endpoint answers
503 with a failure envelope instead.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from content_dashboard_api.app.api.deps import get_store
from content_dashboard_api.app.api.responses import fail
from content_dashboard_api.app.schemas.common import HealthStatus
from content_dashboard_api.app.services.entity_store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthStatus)
async def health(store: EntityStore = Depends(get_store)):
    try:
        records = {kind.value: store.count(kind) for kind in EntityKind}
    except Exception:
        logger.exception("Health check could not query the entity store")
        return fail(status.HTTP_503_SERVICE_UNAVAILABLE, "Entity store unavailable")
    return HealthStatus(
        success=True,
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        message="API is running properly",
        records=records,
    )
