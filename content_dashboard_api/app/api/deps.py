"""
FastAPI dependencies.

The entity store and file storage are created once by ``create_app``
and kept on ``app.state``; these dependencies hand them (or services
bound to them) to the route handlers.  Tests swap in isolated stores
by passing them to ``create_app``.
"""

from fastapi import Depends, Request

from content_dashboard_api.app.services.entity_store import EntityStore
from content_dashboard_api.app.services.file_storage import LocalFileStorage
from content_dashboard_api.app.services.resource_service import (
    ResourceService,
    blog_service,
    gallery_service,
    project_service,
)


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_file_storage(request: Request) -> LocalFileStorage:
    return request.app.state.file_storage


def get_blog_service(store: EntityStore = Depends(get_store)) -> ResourceService:
    return blog_service(store)


def get_project_service(store: EntityStore = Depends(get_store)) -> ResourceService:
    return project_service(store)


def get_gallery_service(store: EntityStore = Depends(get_store)) -> ResourceService:
    return gallery_service(store)
