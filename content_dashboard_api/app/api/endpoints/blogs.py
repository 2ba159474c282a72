"""
Blog post endpoints.

``GET/POST /api/blogs`` and ``GET/PUT/DELETE /api/blogs/{id}``; see
``resource.build_resource_router`` for the shared contract.
"""

from content_dashboard_api.app.api.deps import get_blog_service
from content_dashboard_api.app.api.endpoints.resource import build_resource_router
from content_dashboard_api.app.schemas.blog import BlogRead

router = build_resource_router(get_blog_service, BlogRead)
