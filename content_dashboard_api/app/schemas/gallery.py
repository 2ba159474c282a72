"""
Pydantic models for gallery images.

Images are either registered by URL or uploaded as a file; in the
latter case the file storage collaborator produces the URL and the
resulting payload is validated with ``GalleryImageCreate`` as well.
"""

from datetime import datetime

from pydantic import Field

from .common import CamelModel, HttpUrlStr


class GalleryImageCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["header.png"])
    url: HttpUrlStr = Field(..., examples=["https://example.com/uploads/header.png"])


class GalleryImageRead(CamelModel):
    id: str
    name: str
    url: str
    upload_date: datetime
