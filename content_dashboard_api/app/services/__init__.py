"""
Service layer.

``entity_store`` and ``sqlite_store`` hold the records,
``resource_service`` applies validation and error translation on top
of a store, and ``file_storage`` saves gallery uploads.  API handlers
only talk to resource services, so the store backend can be swapped
without touching them.
"""
