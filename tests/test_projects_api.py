"""
Project endpoints.
"""

import pytest

from content_dashboard_api.app.services.entity_store import EntityKind


def test_create_project_with_defaults(client, project_payload):
    response = client.post("/api/projects", json=project_payload)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["isGroup"] is False
    assert data["status"] == "draft"
    assert data["documentationLink"] is None
    assert data["githubLink"] == "https://github.com/example/portfolio"


@pytest.mark.parametrize("missing", ["projectLink", "githubLink", "coverImageUrl", "title", "content"])
def test_missing_required_field_is_rejected(client, store, project_payload, missing):
    payload = {key: value for key, value in project_payload.items() if key != missing}

    response = client.post("/api/projects", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid project data"
    assert [missing] in [error["path"] for error in body["errors"]]
    assert store.count(EntityKind.PROJECT) == 0


@pytest.mark.parametrize(
    "field, value",
    [
        ("projectLink", "example.com"),
        ("githubLink", "ftp://github.com/x/y"),
        ("documentationLink", "docs"),
        ("isGroup", "sometimes"),
    ],
)
def test_malformed_fields_are_rejected(client, project_payload, field, value):
    response = client.post("/api/projects", json={**project_payload, field: value})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == [field]


def test_update_group_flag_and_links(client, project_payload):
    created = client.post("/api/projects", json=project_payload).json()["data"]

    response = client.put(
        f"/api/projects/{created['id']}",
        json={"isGroup": True, "documentationLink": "https://docs.example.com"},
    )

    updated = response.json()["data"]
    assert response.status_code == 200
    assert updated["isGroup"] is True
    assert updated["documentationLink"] == "https://docs.example.com"
    assert updated["projectLink"] == created["projectLink"]
    assert updated["title"] == created["title"]


def test_status_moves_freely_in_both_directions(client, project_payload):
    created = client.post("/api/projects", json={**project_payload, "status": "published"}).json()["data"]
    url = f"/api/projects/{created['id']}"

    assert client.put(url, json={"status": "draft"}).json()["data"]["status"] == "draft"
    assert client.put(url, json={"status": "published"}).json()["data"]["status"] == "published"


def test_project_list_filter_excludes_other_kinds(client, project_payload, blog_payload):
    client.post("/api/blogs", json=blog_payload)
    client.post("/api/projects", json=project_payload)

    projects = client.get("/api/projects", params={"status": "draft"}).json()["data"]

    assert [project["title"] for project in projects] == ["Portfolio"]


def test_get_update_delete_unknown_project(client):
    assert client.get("/api/projects/nope").status_code == 404
    assert client.put("/api/projects/nope", json={"title": "x"}).status_code == 404
    response = client.delete("/api/projects/nope")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Project not found"}


def test_delete_project(client, project_payload):
    created = client.post("/api/projects", json=project_payload).json()["data"]

    response = client.delete(f"/api/projects/{created['id']}")

    assert response.json() == {"success": True, "message": "Project deleted successfully"}
    assert client.get("/api/projects").json()["data"] == []
