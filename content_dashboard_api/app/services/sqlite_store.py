"""
SQLite-backed entity store.

Each operation opens its own connection through ``core.db.get_cursor``
and commits or rolls back as one transaction.  Updates take the write
lock up front (``BEGIN IMMEDIATE``) so the read-merge-write sequence
cannot interleave with another writer.  Timestamps are stored as ISO
8601 strings and booleans as integers.

All queries use parameterized statements; table and column names come
from the fixed ``TABLES``/``COLUMNS`` mappings only.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional

from content_dashboard_api.app.core.db import get_cursor, init_db
from content_dashboard_api.app.core.errors import StoreFailure
from content_dashboard_api.app.services.entity_store import (
    CREATION_TIMESTAMPS,
    UPDATE_TIMESTAMP,
    EntityKind,
    EntityStore,
    mutable_fields,
    new_identifier,
    next_timestamp,
)


logger = logging.getLogger(__name__)

TABLES: Dict[EntityKind, str] = {
    EntityKind.BLOG: "blogs",
    EntityKind.PROJECT: "projects",
    EntityKind.GALLERY: "gallery",
}

COLUMNS: Dict[EntityKind, tuple] = {
    EntityKind.BLOG: (
        "id", "title", "excerpt", "content", "cover_image_url", "status",
        "published_at", "created_at", "updated_at",
    ),
    EntityKind.PROJECT: (
        "id", "title", "content", "project_link", "github_link", "documentation_link",
        "cover_image_url", "is_group", "status", "published_at", "created_at", "updated_at",
    ),
    EntityKind.GALLERY: ("id", "name", "url", "upload_date"),
}

BOOLEAN_COLUMNS = frozenset({"is_group"})


def _to_db(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(timespec="microseconds")
    if isinstance(value, bool):
        return int(value)
    return value


class SqliteEntityStore(EntityStore):
    """Persistent ``EntityStore`` on a single SQLite database file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        try:
            init_db(db_path)
        except sqlite3.Error as exc:
            raise StoreFailure("Failed to initialise the database") from exc
        logger.info("Using SQLite entity store at %s", db_path)

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.db_path) as cursor:
                yield cursor
        except sqlite3.Error as exc:
            raise StoreFailure("Database operation failed") from exc

    @staticmethod
    def _row_to_record(kind: EntityKind, row: sqlite3.Row) -> Dict[str, Any]:
        record = dict(row)
        for column in BOOLEAN_COLUMNS.intersection(record):
            record[column] = bool(record[column])
        return record

    def _columns_for(self, kind: EntityKind, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep only the payload keys that map onto a column of ``kind``."""
        allowed = COLUMNS[kind]
        return {key: _to_db(value) for key, value in mutable_fields(payload).items() if key in allowed}

    def _select(self, cursor: sqlite3.Cursor, kind: EntityKind, entity_id: str) -> Optional[sqlite3.Row]:
        return cursor.execute(
            f"SELECT * FROM {TABLES[kind]} WHERE id = ?", (entity_id,)
        ).fetchone()

    def list(self, kind: EntityKind, status: Optional[str] = None) -> List[Dict[str, Any]]:
        table = TABLES[kind]
        with self._cursor() as cursor:
            if status is None:
                rows = cursor.execute(f"SELECT * FROM {table} ORDER BY rowid").fetchall()
            elif "status" in COLUMNS[kind]:
                rows = cursor.execute(
                    f"SELECT * FROM {table} WHERE status = ? ORDER BY rowid", (status,)
                ).fetchall()
            else:
                rows = []
            return [self._row_to_record(kind, row) for row in rows]

    def get(self, kind: EntityKind, entity_id: str) -> Optional[Dict[str, Any]]:
        with self._cursor() as cursor:
            row = self._select(cursor, kind, entity_id)
            return self._row_to_record(kind, row) if row else None

    def create(self, kind: EntityKind, payload: Mapping[str, Any]) -> Dict[str, Any]:
        values = self._columns_for(kind, payload)
        now = _to_db(next_timestamp())
        for field in CREATION_TIMESTAMPS[kind]:
            values[field] = now
        with self._cursor() as cursor:
            values["id"] = new_identifier()
            columns = ", ".join(values)
            placeholders = ", ".join("?" for _ in values)
            cursor.execute(
                f"INSERT INTO {TABLES[kind]} ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
            row = self._select(cursor, kind, values["id"])
            logger.debug("Inserted %s %s", kind.value, values["id"])
            return self._row_to_record(kind, row)

    def update(
        self, kind: EntityKind, entity_id: str, payload: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        values = self._columns_for(kind, payload)
        with self._cursor() as cursor:
            cursor.execute("BEGIN IMMEDIATE")
            existing = self._select(cursor, kind, entity_id)
            if existing is None:
                return None
            stamp_field = UPDATE_TIMESTAMP[kind]
            if stamp_field:
                previous = datetime.fromisoformat(existing[stamp_field])
                values[stamp_field] = _to_db(next_timestamp(previous))
            if values:
                assignments = ", ".join(f"{column} = ?" for column in values)
                cursor.execute(
                    f"UPDATE {TABLES[kind]} SET {assignments} WHERE id = ?",
                    (*values.values(), entity_id),
                )
            row = self._select(cursor, kind, entity_id)
            return self._row_to_record(kind, row)

    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        with self._cursor() as cursor:
            cursor.execute(f"DELETE FROM {TABLES[kind]} WHERE id = ?", (entity_id,))
            return cursor.rowcount > 0

    def count(self, kind: EntityKind) -> int:
        with self._cursor() as cursor:
            row = cursor.execute(f"SELECT COUNT(*) AS total FROM {TABLES[kind]}").fetchone()
            return row["total"]
