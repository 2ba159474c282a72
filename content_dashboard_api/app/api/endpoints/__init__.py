"""
Endpoint subpackage.

Each module in this package defines an APIRouter for one resource
(blogs, projects, gallery) or for the health check.  The routers are
aggregated in ``router.py`` at the package level and then included in
the main application under ``/api``.
"""
