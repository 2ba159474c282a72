"""
Gallery endpoints, including multipart uploads.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from content_dashboard_api.app.core.errors import UnsupportedOperation
from content_dashboard_api.app.main import create_app
from content_dashboard_api.app.services.entity_store import EntityKind, InMemoryEntityStore
from content_dashboard_api.app.services.resource_service import gallery_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_create_image_from_json(client):
    response = client.post(
        "/api/gallery", json={"name": "header", "url": "https://cdn.example.com/header.png"}
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "header"
    assert data["url"] == "https://cdn.example.com/header.png"
    assert data["uploadDate"]
    assert set(data) == {"id", "name", "url", "uploadDate"}


def test_create_image_requires_name_and_url(client, store):
    response = client.post("/api/gallery", json={"url": "nope"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid image data"
    assert {tuple(error["path"]) for error in body["errors"]} == {("name",), ("url",)}
    assert store.count(EntityKind.GALLERY) == 0


def test_create_image_rejects_malformed_json(client):
    response = client.post(
        "/api/gallery", content=b"{", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "json_invalid"


def test_upload_image_file(client, upload_dir):
    response = client.post(
        "/api/gallery",
        files={"file": ("photo.png", PNG_BYTES, "image/png")},
        data={"name": "Holiday"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Holiday"
    assert data["url"].startswith("http://testserver/uploads/")
    stored = upload_dir / data["url"].rsplit("/", 1)[-1]
    assert stored.read_bytes() == PNG_BYTES


def test_uploaded_file_is_served(client):
    data = client.post(
        "/api/gallery", files={"file": ("photo.png", PNG_BYTES, "image/png")}
    ).json()["data"]

    response = client.get(data["url"].replace("http://testserver", ""))

    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_upload_name_defaults_to_filename(client):
    response = client.post("/api/gallery", files={"file": ("photo.png", PNG_BYTES, "image/png")})

    assert response.json()["data"]["name"] == "photo.png"


def test_upload_rejects_non_image(client, store):
    response = client.post(
        "/api/gallery", files={"file": ("notes.txt", b"hello", "text/plain")}
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "content_type"
    assert store.count(EntityKind.GALLERY) == 0


def test_upload_rejects_oversized_file(client):
    response = client.post(
        "/api/gallery", files={"file": ("big.png", b"x" * 2048, "image/png")}
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "file_too_large"


def test_upload_without_file_field(client):
    response = client.post("/api/gallery", files={"other": ("a.png", PNG_BYTES, "image/png")})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == ["file"]


def test_list_get_and_delete_images(client):
    first = client.post("/api/gallery", json={"name": "a", "url": "https://x.test/a.png"}).json()["data"]
    second = client.post("/api/gallery", json={"name": "b", "url": "https://x.test/b.png"}).json()["data"]

    listed = client.get("/api/gallery").json()["data"]
    assert {image["id"] for image in listed} == {first["id"], second["id"]}
    assert client.get(f"/api/gallery/{first['id']}").json()["data"] == first

    deleted = client.delete(f"/api/gallery/{first['id']}")
    assert deleted.json() == {"success": True, "message": "Image deleted successfully"}

    again = client.delete(f"/api/gallery/{first['id']}")
    assert again.status_code == 404
    assert again.json() == {"success": False, "message": "Image not found"}


def test_gallery_images_cannot_be_updated(client):
    created = client.post("/api/gallery", json={"name": "a", "url": "https://x.test/a.png"}).json()["data"]

    response = client.put(f"/api/gallery/{created['id']}", json={"name": "b"})

    assert response.status_code == 405
    assert response.json()["success"] is False


class FailingCreateStore(InMemoryEntityStore):
    def create(self, kind, payload):
        raise RuntimeError("insert failed")


def test_deleting_uploaded_image_removes_file(client, upload_dir):
    data = client.post(
        "/api/gallery", files={"file": ("photo.png", PNG_BYTES, "image/png")}
    ).json()["data"]
    assert len(list(upload_dir.iterdir())) == 1

    response = client.delete(f"/api/gallery/{data['id']}")

    assert response.status_code == 200
    assert list(upload_dir.iterdir()) == []
    assert client.get(data["url"].replace("http://testserver", "")).status_code == 404


def test_deleting_image_registered_by_url_leaves_uploads_alone(client, upload_dir):
    client.post("/api/gallery", files={"file": ("photo.png", PNG_BYTES, "image/png")})
    linked = client.post(
        "/api/gallery", json={"name": "remote", "url": "https://cdn.example.com/remote.png"}
    ).json()["data"]

    response = client.delete(f"/api/gallery/{linked['id']}")

    assert response.status_code == 200
    assert len(list(upload_dir.iterdir())) == 1


def test_failed_create_removes_uploaded_file(settings, file_storage, upload_dir):
    app = create_app(settings, store=FailingCreateStore(), file_storage=file_storage)

    with TestClient(app) as client:
        response = client.post(
            "/api/gallery", files={"file": ("photo.png", PNG_BYTES, "image/png")}
        )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to upload image"}
    assert list(upload_dir.iterdir()) == []


@pytest.mark.parametrize(
    "url",
    [
        None,
        "https://cdn.example.com/uploads/a.png",
        "http://testserver/uploads/",
        "http://testserver/uploads/../secret.png",
        "http://testserver/uploads/missing.png",
    ],
)
def test_storage_delete_ignores_foreign_and_missing_files(file_storage, url):
    assert file_storage.delete(url) is False


def test_storage_delete_removes_saved_file(file_storage, upload_dir):
    url = file_storage.save(PNG_BYTES, "photo.png", "image/png")

    assert file_storage.delete(url) is True
    assert list(upload_dir.iterdir()) == []


def test_gallery_service_refuses_updates(memory_store):
    service = gallery_service(memory_store)

    with pytest.raises(UnsupportedOperation) as excinfo:
        asyncio.run(service.update("any", {"name": "b"}))

    assert excinfo.value.status_code == 405
    assert excinfo.value.message == "Gallery images cannot be updated"


def test_upload_at_size_limit_is_accepted(client, upload_dir):
    data = b"\x89PNG" + b"\x00" * 1020

    response = client.post("/api/gallery", files={"file": ("edge.png", data, "image/png")})

    assert response.status_code == 201
    stored = upload_dir / response.json()["data"]["url"].rsplit("/", 1)[-1]
    assert stored.read_bytes() == data
