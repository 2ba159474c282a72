"""
Pydantic models for blog posts.

``BlogCreate`` is the full insert payload, ``BlogUpdate`` the same
shape with every field optional, and ``BlogRead`` the stored record
including the identifier and timestamps assigned by the store.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel, OptionalHttpUrlStr, PublishStatus


class BlogCreate(CamelModel):
    """Schema for creating a blog post."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Hello"])
    excerpt: Optional[str] = Field(None, examples=["A short summary"])
    content: str = Field(..., min_length=1, examples=["# World"])
    cover_image_url: OptionalHttpUrlStr = Field(None, examples=["https://example.com/cover.png"])
    status: PublishStatus = Field(PublishStatus.DRAFT, validate_default=True)
    published_at: Optional[datetime] = None


class BlogUpdate(CamelModel):
    """Schema for updating a blog post.

    All fields are optional; only provided fields will be updated.
    Fields that are required on create default to ``None`` without
    being nullable, so an explicit ``null`` for them is rejected.
    """

    title: str = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: str = Field(None, min_length=1)
    cover_image_url: OptionalHttpUrlStr = None
    status: PublishStatus = None
    published_at: Optional[datetime] = None


class BlogRead(CamelModel):
    """Schema for reading a blog post from the API."""

    id: str
    title: str
    excerpt: Optional[str] = None
    content: str
    cover_image_url: Optional[str] = None
    status: PublishStatus
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
