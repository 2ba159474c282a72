"""
Pydantic models for portfolio projects.

A project links to the live project, its source repository
(``githubLink``) and optionally its documentation.  The cover image is
required, unlike blog posts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel, HttpUrlStr, OptionalHttpUrlStr, PublishStatus


class ProjectCreate(CamelModel):
    """Schema for creating a project."""

    title: str = Field(..., min_length=1, examples=["Portfolio site"])
    content: str = Field(..., min_length=1)
    project_link: HttpUrlStr = Field(..., examples=["https://example.com"])
    github_link: HttpUrlStr = Field(..., examples=["https://github.com/user/repo"])
    documentation_link: OptionalHttpUrlStr = None
    cover_image_url: HttpUrlStr = Field(..., examples=["https://example.com/cover.png"])
    is_group: bool = False
    status: PublishStatus = Field(PublishStatus.DRAFT, validate_default=True)
    published_at: Optional[datetime] = None


class ProjectUpdate(CamelModel):
    """Schema for updating a project.

    All fields are optional; only provided fields will be updated.
    """

    title: str = Field(None, min_length=1)
    content: str = Field(None, min_length=1)
    project_link: HttpUrlStr = None
    github_link: HttpUrlStr = None
    documentation_link: OptionalHttpUrlStr = None
    cover_image_url: HttpUrlStr = None
    is_group: bool = None
    status: PublishStatus = None
    published_at: Optional[datetime] = None


class ProjectRead(CamelModel):
    id: str
    title: str
    content: str
    project_link: str
    github_link: str
    documentation_link: Optional[str] = None
    cover_image_url: str
    is_group: bool
    status: PublishStatus
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
