"""
Keyed record storage for the dashboard's entity kinds.

``EntityStore`` defines the contract shared by every backend: list
(optionally filtered by status), get, create, update and delete, each
scoped to one ``EntityKind``.  Records are plain dicts with snake_case
keys.  The store assigns identifiers and timestamps itself and never
validates payload shape; that happens in the resource services before
the store is called.

``InMemoryEntityStore`` keeps records for the lifetime of the process.
The persistent backend lives in ``sqlite_store``.
"""

from __future__ import annotations

import abc
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    BLOG = "blog"
    PROJECT = "project"
    GALLERY = "gallery"


# Keys a caller may never set, in both snake_case and wire (camelCase) form.
IMMUTABLE_FIELDS = frozenset(
    {"id", "created_at", "updated_at", "upload_date", "createdAt", "updatedAt", "uploadDate"}
)

# Timestamps stamped once at creation, and the one refreshed on update.
CREATION_TIMESTAMPS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.BLOG: ("created_at", "updated_at"),
    EntityKind.PROJECT: ("created_at", "updated_at"),
    EntityKind.GALLERY: ("upload_date",),
}
UPDATE_TIMESTAMP: Dict[EntityKind, Optional[str]] = {
    EntityKind.BLOG: "updated_at",
    EntityKind.PROJECT: "updated_at",
    EntityKind.GALLERY: None,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """Return the current time, nudged forward so it is later than ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def new_identifier() -> str:
    return uuid.uuid4().hex


def mutable_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy ``payload`` without the identifier and timestamp fields."""
    return {key: value for key, value in payload.items() if key not in IMMUTABLE_FIELDS}


class EntityStore(abc.ABC):
    """Abstract CRUD repository over the three entity kinds."""

    @abc.abstractmethod
    def list(self, kind: EntityKind, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return every record of ``kind`` in insertion order.

        When ``status`` is given only records whose ``status`` equals
        it exactly are returned.
        """

    @abc.abstractmethod
    def get(self, kind: EntityKind, entity_id: str) -> Optional[Dict[str, Any]]:
        """Return the record or ``None`` when the identifier is unknown."""

    @abc.abstractmethod
    def create(self, kind: EntityKind, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Persist a new record and return it with id and timestamps."""

    @abc.abstractmethod
    def update(
        self, kind: EntityKind, entity_id: str, payload: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Merge ``payload`` onto an existing record.

        Returns ``None`` when the identifier is unknown; records are
        never created by an update.
        """

    @abc.abstractmethod
    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        """Remove the record; ``True`` only if something was removed."""

    @abc.abstractmethod
    def count(self, kind: EntityKind) -> int:
        """Number of stored records of ``kind``."""


class InMemoryEntityStore(EntityStore):
    """Process-local store backed by one dict per entity kind.

    All access goes through a single re-entrant lock so a read-merge-write
    update is never interleaved with another mutation.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: Dict[EntityKind, Dict[str, Dict[str, Any]]] = {
            kind: {} for kind in EntityKind
        }

    def list(self, kind: EntityKind, status: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            records = self._records[kind].values()
            if status is not None:
                records = [record for record in records if record.get("status") == status]
            return [dict(record) for record in records]

    def get(self, kind: EntityKind, entity_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records[kind].get(entity_id)
            return dict(record) if record is not None else None

    def create(self, kind: EntityKind, payload: Mapping[str, Any]) -> Dict[str, Any]:
        with self._lock:
            entity_id = new_identifier()
            while entity_id in self._records[kind]:
                entity_id = new_identifier()
            now = next_timestamp()
            record = {"id": entity_id, **mutable_fields(payload)}
            for field in CREATION_TIMESTAMPS[kind]:
                record[field] = now
            self._records[kind][entity_id] = record
            logger.debug("Stored %s %s in memory", kind.value, entity_id)
            return dict(record)

    def update(
        self, kind: EntityKind, entity_id: str, payload: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            existing = self._records[kind].get(entity_id)
            if existing is None:
                return None
            record = {**existing, **mutable_fields(payload)}
            stamp_field = UPDATE_TIMESTAMP[kind]
            if stamp_field:
                record[stamp_field] = next_timestamp(existing.get(stamp_field))
            self._records[kind][entity_id] = record
            return dict(record)

    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        with self._lock:
            return self._records[kind].pop(entity_id, None) is not None

    def count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._records[kind])
