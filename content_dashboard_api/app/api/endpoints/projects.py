"""
Portfolio project endpoints, mounted under ``/api/projects``.
"""

from content_dashboard_api.app.api.deps import get_project_service
from content_dashboard_api.app.api.endpoints.resource import build_resource_router
from content_dashboard_api.app.schemas.project import ProjectRead

router = build_resource_router(get_project_service, ProjectRead)
