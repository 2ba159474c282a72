"""
Application package.

This package contains the main entrypoint for the API and all of its
submodules:

* ``core``: configuration, logging, SQLite access and the error taxonomy.
* ``schemas``: pydantic models for blog posts, projects and gallery images.
* ``services``: the entity stores, payload validation, resource services
  and upload storage.
* ``api``: routers, dependencies and the response envelope.

The ASGI application itself is ``content_dashboard_api.app.main:app``.
"""
