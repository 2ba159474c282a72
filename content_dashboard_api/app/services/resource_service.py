"""
Resource services: the layer between HTTP handlers and the entity store.

A ``ResourceService`` binds one ``EntityKind`` to its schemas and the
human-readable labels used in response messages.  It validates every
payload before the store is touched, raises ``NotFoundError`` for
unknown identifiers and converts any unexpected store exception into a
``StoreFailure`` with a generic message, logging the original.

Handlers obtain services through ``api.deps``; the services themselves
hold a reference to the store constructed at application start.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Type

from pydantic import BaseModel

from content_dashboard_api.app.core.errors import (
    NotFoundError,
    StoreFailure,
    UnsupportedOperation,
    ValidationError,
)
from content_dashboard_api.app.schemas.blog import BlogCreate, BlogRead, BlogUpdate
from content_dashboard_api.app.schemas.gallery import GalleryImageCreate, GalleryImageRead
from content_dashboard_api.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from content_dashboard_api.app.services.entity_store import EntityKind, EntityStore
from content_dashboard_api.app.services.validation import validate_payload


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceLabels:
    """Wording for the messages of one resource.

    ``title`` starts sentences ("Blog not found"), ``noun`` and
    ``plural`` fill in failure messages ("Failed to fetch blogs").
    """

    title: str
    noun: str
    plural: str
    create_verb: str = "create"


class ResourceService:
    """CRUD operations for one entity kind, returning read schemas."""

    def __init__(
        self,
        store: EntityStore,
        kind: EntityKind,
        *,
        create_schema: Type[BaseModel],
        read_schema: Type[BaseModel],
        labels: ResourceLabels,
        update_schema: Optional[Type[BaseModel]] = None,
    ) -> None:
        self.store = store
        self.kind = kind
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.read_schema = read_schema
        self.labels = labels

    @contextmanager
    def _store_call(self, failure_message: str) -> Iterator[None]:
        try:
            yield
        except Exception as exc:
            logger.exception("%s (%s store)", failure_message, self.kind.value)
            raise StoreFailure(failure_message) from exc

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.labels.title} not found")

    def _validated(self, schema: Type[BaseModel], raw: Any) -> BaseModel:
        result = validate_payload(schema, raw)
        if not result.ok:
            logger.info("Rejected %s payload with %d error(s)", self.kind.value, len(result.errors))
            raise ValidationError(f"Invalid {self.labels.noun} data", result.errors)
        return result.value

    async def list(self, status: Optional[str] = None) -> List[BaseModel]:
        with self._store_call(f"Failed to fetch {self.labels.plural}"):
            records = self.store.list(self.kind, status)
            return [self.read_schema.model_validate(record) for record in records]

    async def get(self, entity_id: str) -> BaseModel:
        with self._store_call(f"Failed to fetch {self.labels.noun}"):
            record = self.store.get(self.kind, entity_id)
            if record is not None:
                return self.read_schema.model_validate(record)
        logger.debug("%s %s not found", self.kind.value, entity_id)
        raise self._not_found()

    async def create(self, raw: Any) -> BaseModel:
        payload = self._validated(self.create_schema, raw)
        with self._store_call(f"Failed to {self.labels.create_verb} {self.labels.noun}"):
            record = self.store.create(self.kind, payload.model_dump())
            created = self.read_schema.model_validate(record)
        logger.info("Created %s %s", self.kind.value, created.id)
        return created

    async def update(self, entity_id: str, raw: Any) -> BaseModel:
        if self.update_schema is None:
            raise UnsupportedOperation(f"{self.labels.plural.capitalize()} cannot be updated")
        payload = self._validated(self.update_schema, raw)
        changes = payload.model_dump(exclude_unset=True)
        with self._store_call(f"Failed to update {self.labels.noun}"):
            record = self.store.update(self.kind, entity_id, changes)
            updated = self.read_schema.model_validate(record) if record is not None else None
        if updated is None:
            raise self._not_found()
        logger.info("Updated %s %s (%s)", self.kind.value, entity_id, ", ".join(sorted(changes)) or "no fields")
        return updated

    async def delete(self, entity_id: str) -> str:
        with self._store_call(f"Failed to delete {self.labels.noun}"):
            deleted = self.store.delete(self.kind, entity_id)
        if not deleted:
            raise self._not_found()
        logger.info("Deleted %s %s", self.kind.value, entity_id)
        return f"{self.labels.title} deleted successfully"


def blog_service(store: EntityStore) -> ResourceService:
    return ResourceService(
        store,
        EntityKind.BLOG,
        create_schema=BlogCreate,
        update_schema=BlogUpdate,
        read_schema=BlogRead,
        labels=ResourceLabels(title="Blog", noun="blog", plural="blogs"),
    )


def project_service(store: EntityStore) -> ResourceService:
    return ResourceService(
        store,
        EntityKind.PROJECT,
        create_schema=ProjectCreate,
        update_schema=ProjectUpdate,
        read_schema=ProjectRead,
        labels=ResourceLabels(title="Project", noun="project", plural="projects"),
    )


def gallery_service(store: EntityStore) -> ResourceService:
    return ResourceService(
        store,
        EntityKind.GALLERY,
        create_schema=GalleryImageCreate,
        read_schema=GalleryImageRead,
        labels=ResourceLabels(
            title="Image", noun="image", plural="gallery images", create_verb="upload"
        ),
    )
