"""
Pydantic schema definitions for API payloads.

Each entity kind (blog posts, projects, gallery images) defines its own
create, update and read models.  Schemas are separated from the stored
records to decouple API representation from persistence.
"""
