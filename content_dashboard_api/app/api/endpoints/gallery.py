"""
Gallery endpoints.

Images can be registered from JSON (``{"name", "url"}``) or uploaded
as ``multipart/form-data`` with a ``file`` field and an optional
``name``.  Uploads go through the file storage collaborator first; the
URL it returns is validated and stored exactly like a JSON payload.
Gallery images have no status and are never updated in place.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile

from content_dashboard_api.app.api.deps import get_file_storage, get_gallery_service
from content_dashboard_api.app.api.responses import ok
from content_dashboard_api.app.core.errors import DashboardError, StoreFailure, ValidationError
from content_dashboard_api.app.schemas.common import Envelope
from content_dashboard_api.app.schemas.gallery import GalleryImageRead
from content_dashboard_api.app.services.file_storage import LocalFileStorage
from content_dashboard_api.app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _upload_payload(request: Request, storage: LocalFileStorage) -> dict:
    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise ValidationError(
            "Invalid image data",
            [{"path": ["file"], "message": "A file field is required", "code": "missing"}],
        )
    # One byte past the limit is enough to reject an oversized file.
    data = await upload.read(storage.max_bytes + 1)
    try:
        url = storage.save(data, upload.filename or "upload", upload.content_type)
    except OSError as exc:
        logger.exception("Could not write upload %r", upload.filename)
        raise StoreFailure("Failed to upload image") from exc
    name = form.get("name")
    if not isinstance(name, str) or not name.strip():
        name = upload.filename
    return {"name": name, "url": url}


async def _json_payload(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationError(
            "Invalid image data",
            [{"path": ["body"], "message": "Request body must be valid JSON", "code": "json_invalid"}],
        ) from exc


@router.get("", response_model=Envelope[List[GalleryImageRead]])
async def list_images(service: ResourceService = Depends(get_gallery_service)):
    """Return every gallery image in upload order."""
    return ok(await service.list())


@router.get("/{image_id}", response_model=Envelope[GalleryImageRead])
async def get_image(image_id: str, service: ResourceService = Depends(get_gallery_service)):
    return ok(await service.get(image_id))


@router.post("", response_model=Envelope[GalleryImageRead], status_code=status.HTTP_201_CREATED)
async def create_image(
    request: Request,
    service: ResourceService = Depends(get_gallery_service),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    """Register an image by URL or upload one.

    The request content type decides which form is expected.  A file
    saved for an upload is removed again if the record is not created.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        created = await service.create(await _json_payload(request))
        return ok(created, status_code=status.HTTP_201_CREATED)

    payload = await _upload_payload(request, storage)
    try:
        created = await service.create(payload)
    except DashboardError:
        storage.delete(payload["url"])
        raise
    return ok(created, status_code=status.HTTP_201_CREATED)


@router.delete("/{image_id}", response_model=Envelope)
async def delete_image(
    image_id: str,
    service: ResourceService = Depends(get_gallery_service),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    """Delete the record and, for uploaded images, the stored file."""
    image = await service.get(image_id)
    message = await service.delete(image_id)
    try:
        storage.delete(image.url)
    except OSError:
        logger.exception("Image %s deleted but its file could not be removed", image_id)
    return ok(message=message)
