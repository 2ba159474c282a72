"""
Top-level API router.

This router aggregates the resource routers under their collection
names.  The application mounts it under ``/api``, giving
``/api/blogs``, ``/api/projects``, ``/api/gallery`` and
``/api/health``.
"""

from fastapi import APIRouter

from .endpoints import blogs, gallery, health, projects

router = APIRouter()

router.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
router.include_router(health.router, prefix="/health", tags=["health"])
