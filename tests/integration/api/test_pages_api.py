"""Integration tests for page endpoints."""

import uuid
from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient

Factory = Callable[..., dict[str, Any]]


def test_slug_derived_from_title_round_trips(client: TestClient, create_page: Factory) -> None:
    page = create_page(title="Hello, World! Part 2", content="<p>body</p>")

    assert page["slug"] == "hello-world-part-2"

    response = client.get("/api/pages/hello-world-part-2")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == page["id"]
    assert response.json()["data"]["content"] == "<p>body</p>"


def test_slug_lookup_ignores_case(client: TestClient, create_page: Factory) -> None:
    create_page(slug="Café Menu")

    response = client.get("/api/pages/CAFE-MENU")

    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "cafe-menu"


def test_duplicate_slug_rejected(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    create_page(title="About us")

    response = client.post(
        "/api/pages",
        json={
            "title": "About Us!",
            "description": "Again",
            "imageUrl": "https://cdn.example.com/a.png",
            "thumbnailUrl": "https://cdn.example.com/t.png",
            "editorType": "quill",
        },
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "A page with this slug already exists",
    }


def test_update_to_taken_slug_rejected(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    create_page(title="First")
    second = create_page(title="Second")

    clash = client.put(
        f"/api/pages/{second['id']}", json={"slug": "first"}, headers=auth_headers
    )
    same = client.put(
        f"/api/pages/{second['id']}", json={"slug": "second", "popular": True}, headers=auth_headers
    )

    assert clash.status_code == 400
    assert same.status_code == 200
    assert same.json()["data"]["popular"] is True


def test_slug_without_letters_is_invalid(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    page = create_page()

    response = client.put(f"/api/pages/{page['id']}", json={"slug": "!!!"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "slug", "message": "Slug must contain at least one letter or digit"}
    ]


def test_create_validates_enums_and_caps(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.post(
        "/api/pages",
        json={
            "title": "Bad",
            "description": "Bad",
            "imageUrl": "https://cdn.example.com/a.png",
            "thumbnailUrl": "ftp://cdn.example.com/t.png",
            "editorType": "word",
            "groups": ["blogs", "gardening"],
        },
        headers=auth_headers,
    )

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert "editorType" in fields
    assert "thumbnailUrl" in fields
    assert any(field.startswith("groups") for field in fields)


def test_list_filters_and_omits_content(client: TestClient, create_page: Factory) -> None:
    create_page(title="Heart health", groups=["cardiology"], tags=["heart"])
    create_page(title="Release notes", groups=["blogs"], category="news")

    by_group = client.get("/api/pages", params={"group": "cardiology"}).json()["data"]
    by_category = client.get("/api/pages", params={"category": "news"}).json()["data"]

    assert [p["title"] for p in by_group["pages"]] == ["Heart health"]
    assert "content" not in by_group["pages"][0]
    assert [p["title"] for p in by_category["pages"]] == ["Release notes"]


def test_get_by_id_and_delete(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    page = create_page(title="Temporary")

    assert client.get(f"/api/pages/by-id/{page['id']}").json()["data"]["slug"] == "temporary"

    deleted = client.delete(f"/api/pages/{page['id']}", headers=auth_headers)
    assert deleted.json()["data"] == {"id": page["id"], "title": "Temporary"}
    assert client.get("/api/pages/temporary").status_code == 404
    assert client.get(f"/api/pages/by-id/{uuid.uuid4()}").json() == {
        "success": False,
        "message": "Page not found",
    }


def test_null_for_required_fields_is_rejected(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    page = create_page(title="Kept", tags=["keep"])

    tags = client.put(f"/api/pages/{page['id']}", json={"tags": None}, headers=auth_headers)
    title = client.put(f"/api/pages/{page['id']}", json={"title": None}, headers=auth_headers)

    assert tags.status_code == 400
    assert tags.json()["errors"] == [{"field": "tags", "message": "must not be null"}]
    assert title.status_code == 400
    assert title.json()["message"] == "Validation failed"
    assert title.json()["errors"][0]["field"] == "title"

    stored = client.get(f"/api/pages/by-id/{page['id']}").json()["data"]
    assert stored["title"] == "Kept"
    assert stored["tags"] == ["keep"]
    assert client.get("/api/pages").status_code == 200


def test_null_for_optional_fields_clears_them(
    client: TestClient, auth_headers: dict[str, str], create_page: Factory
) -> None:
    page = create_page(category="news", metaTitle="Old")

    response = client.put(
        f"/api/pages/{page['id']}",
        json={"category": None, "metaTitle": None},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["category"] is None
    assert response.json()["data"]["metaTitle"] is None
