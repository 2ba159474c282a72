"""
Entity store behaviour, exercised against both backends.
"""

from datetime import datetime

import pytest

from content_dashboard_api.app.core.db import get_cursor
from content_dashboard_api.app.services.entity_store import EntityKind


BLOG = {"title": "Hello", "content": "World", "status": "draft", "excerpt": None}
PROJECT = {
    "title": "Portfolio",
    "content": "x",
    "project_link": "https://example.com",
    "github_link": "https://github.com/x/y",
    "cover_image_url": "https://example.com/c.png",
    "is_group": False,
    "status": "draft",
}


def as_datetime(value):
    return value if isinstance(value, datetime) else datetime.fromisoformat(value)


def test_create_assigns_id_and_timestamps(any_store):
    record = any_store.create(EntityKind.BLOG, BLOG)

    assert record["id"]
    assert record["title"] == "Hello"
    assert record["created_at"] == record["updated_at"]


def test_create_then_get_round_trip(any_store):
    created = any_store.create(EntityKind.BLOG, BLOG)

    assert any_store.get(EntityKind.BLOG, created["id"]) == created


def test_create_ignores_caller_supplied_id_and_timestamps(any_store):
    record = any_store.create(
        EntityKind.BLOG,
        {**BLOG, "id": "chosen", "created_at": "2000-01-01T00:00:00+00:00", "createdAt": "x"},
    )

    assert record["id"] != "chosen"
    assert as_datetime(record["created_at"]).year != 2000
    assert "createdAt" not in record


def test_identifiers_unique_within_kind(any_store):
    ids = {any_store.create(EntityKind.BLOG, BLOG)["id"] for _ in range(20)}

    assert len(ids) == 20


def test_get_unknown_returns_none(any_store):
    assert any_store.get(EntityKind.BLOG, "missing") is None


def test_partial_update_changes_only_given_fields(any_store):
    created = any_store.create(EntityKind.BLOG, {**BLOG, "excerpt": "short"})

    updated = any_store.update(EntityKind.BLOG, created["id"], {"status": "published"})

    assert updated["status"] == "published"
    for field in ("id", "title", "content", "excerpt", "created_at"):
        assert updated[field] == created[field]
    assert as_datetime(updated["updated_at"]) > as_datetime(created["updated_at"])


def test_update_strips_immutable_fields(any_store):
    created = any_store.create(EntityKind.BLOG, BLOG)

    updated = any_store.update(
        EntityKind.BLOG,
        created["id"],
        {"id": "other", "created_at": "2000-01-01T00:00:00+00:00", "title": "Renamed"},
    )

    assert updated["id"] == created["id"]
    assert updated["created_at"] == created["created_at"]
    assert updated["title"] == "Renamed"
    assert any_store.get(EntityKind.BLOG, "other") is None


def test_updated_at_strictly_advances_on_each_update(any_store):
    record = any_store.create(EntityKind.BLOG, BLOG)
    stamps = [as_datetime(record["updated_at"])]
    for _ in range(5):
        record = any_store.update(EntityKind.BLOG, record["id"], {})
        stamps.append(as_datetime(record["updated_at"]))

    assert stamps == sorted(set(stamps))


def test_update_unknown_returns_none_and_does_not_upsert(any_store):
    assert any_store.update(EntityKind.BLOG, "missing", {"title": "x"}) is None
    assert any_store.count(EntityKind.BLOG) == 0


def test_delete_reports_whether_a_record_was_removed(any_store):
    created = any_store.create(EntityKind.BLOG, BLOG)

    assert any_store.delete(EntityKind.BLOG, created["id"]) is True
    assert any_store.delete(EntityKind.BLOG, created["id"]) is False
    assert any_store.get(EntityKind.BLOG, created["id"]) is None


def test_status_filter_returns_exact_subset(any_store):
    drafts = [any_store.create(EntityKind.BLOG, {**BLOG, "title": f"d{i}"}) for i in range(3)]
    published = [
        any_store.create(EntityKind.BLOG, {**BLOG, "title": f"p{i}", "status": "published"})
        for i in range(2)
    ]
    any_store.create(EntityKind.PROJECT, PROJECT)

    draft_ids = {record["id"] for record in any_store.list(EntityKind.BLOG, "draft")}
    published_ids = {record["id"] for record in any_store.list(EntityKind.BLOG, "published")}
    all_ids = {record["id"] for record in any_store.list(EntityKind.BLOG)}

    assert draft_ids == {record["id"] for record in drafts}
    assert published_ids == {record["id"] for record in published}
    assert all_ids == draft_ids | published_ids


def test_list_keeps_insertion_order(any_store):
    titles = ["first", "second", "third"]
    for title in titles:
        any_store.create(EntityKind.BLOG, {**BLOG, "title": title})

    assert [record["title"] for record in any_store.list(EntityKind.BLOG)] == titles


def test_gallery_images_get_upload_date_only(any_store):
    image = any_store.create(EntityKind.GALLERY, {"name": "a.png", "url": "https://x.test/a.png"})

    assert image["upload_date"]
    assert "created_at" not in image
    assert any_store.list(EntityKind.GALLERY, "draft") == []


def test_count_per_kind(any_store):
    any_store.create(EntityKind.BLOG, BLOG)
    any_store.create(EntityKind.GALLERY, {"name": "a.png", "url": "https://x.test/a.png"})

    assert any_store.count(EntityKind.BLOG) == 1
    assert any_store.count(EntityKind.PROJECT) == 0
    assert any_store.count(EntityKind.GALLERY) == 1


def test_memory_store_returns_copies(memory_store):
    created = memory_store.create(EntityKind.BLOG, BLOG)
    created["title"] = "mutated"

    assert memory_store.get(EntityKind.BLOG, created["id"])["title"] == "Hello"


def test_sqlite_store_persists_across_instances(tmp_path):
    from content_dashboard_api.app.services.sqlite_store import SqliteEntityStore

    path = str(tmp_path / "persist.db")
    created = SqliteEntityStore(path).create(EntityKind.PROJECT, {**PROJECT, "is_group": True})

    reopened = SqliteEntityStore(path).get(EntityKind.PROJECT, created["id"])

    assert reopened == created
    assert reopened["is_group"] is True


def test_sqlite_migrations_recorded_once(sqlite_store):
    from content_dashboard_api.app.core.db import MIGRATIONS, init_db

    init_db(sqlite_store.db_path)

    with get_cursor(sqlite_store.db_path) as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations")]
    assert versions == [version for version, _ in MIGRATIONS]


@pytest.mark.parametrize("kind", list(EntityKind))
def test_new_store_is_empty(any_store, kind):
    assert any_store.list(kind) == []
