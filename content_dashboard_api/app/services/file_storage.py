"""
File storage for gallery uploads.

The gallery only needs one thing from storage: take the bytes of an
uploaded image and hand back a public URL for it.  ``LocalFileStorage``
writes into the configured upload directory (served by the app under
``/uploads``) using a generated file name, so uploads never overwrite
each other and user-supplied names never reach the filesystem.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from content_dashboard_api.app.core.errors import ValidationError


logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}

UPLOADS_ROUTE = "/uploads"


class LocalFileStorage:
    """Store uploaded images on the local filesystem."""

    def __init__(self, upload_dir: str, public_base_url: str, max_bytes: int = 5 * 1024 * 1024) -> None:
        self.upload_dir = Path(upload_dir).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    def save(self, data: bytes, filename: str, content_type: Optional[str]) -> str:
        """Write ``data`` to the upload directory and return its public URL.

        Raises ``ValidationError`` for empty or oversized files and for
        content types other than common image formats.  Filesystem
        errors propagate unchanged.
        """
        extension = ALLOWED_EXTENSIONS.get((content_type or "").lower())
        if extension is None:
            raise ValidationError(
                "Invalid image data",
                [{"path": ["file"], "message": f"Unsupported content type: {content_type}", "code": "content_type"}],
            )
        if not data:
            raise ValidationError(
                "Invalid image data",
                [{"path": ["file"], "message": "Uploaded file is empty", "code": "empty_file"}],
            )
        if len(data) > self.max_bytes:
            raise ValidationError(
                "Invalid image data",
                [{"path": ["file"], "message": f"File exceeds {self.max_bytes} bytes", "code": "file_too_large"}],
            )

        os.makedirs(self.upload_dir, exist_ok=True)
        stored_name = f"{uuid.uuid4().hex}.{extension}"
        with open(self.upload_dir / stored_name, "wb") as f:
            f.write(data)
        logger.info("Saved upload %r as %s (%d bytes)", filename, stored_name, len(data))
        return f"{self.public_base_url}{UPLOADS_ROUTE}/{stored_name}"

    def delete(self, url: Optional[str]) -> bool:
        """Remove the file behind ``url`` if this storage wrote it.

        URLs outside ``{public_base_url}/uploads/`` (images registered by
        URL only) are left alone and ``False`` is returned, as for files
        that no longer exist.  Filesystem errors propagate.
        """
        prefix = f"{self.public_base_url}{UPLOADS_ROUTE}/"
        if not url or not url.startswith(prefix):
            return False
        stored_name = url[len(prefix):]
        if not stored_name or "/" in stored_name or "\\" in stored_name or stored_name.startswith("."):
            return False
        path = self.upload_dir / stored_name
        if not path.is_file():
            return False
        path.unlink()
        logger.info("Deleted upload %s", stored_name)
        return True
