"""Integration tests for the contact form endpoints."""

from collections.abc import Callable

from fastapi.testclient import TestClient


def submit(client: TestClient, **fields: str) -> dict:
    body = {"name": "Ada", "email": "Ada@Example.com", "message": "Hi there", **fields}
    return client.post("/api/contact", json=body).json()


def test_public_submission(client: TestClient) -> None:
    body = submit(client, mobile="+44 20 7946 0000")

    assert body["success"] is True
    assert body["message"] == "Contact form submitted successfully"
    assert body["data"]["contact"] == {
        "name": "Ada",
        "email": "ada@example.com",
        "mobile": "+44 20 7946 0000",
        "message": "Hi there",
    }
    assert body["data"]["id"]
    assert body["data"]["submittedAt"]


def test_description_is_accepted_as_message(client: TestClient) -> None:
    response = client.post(
        "/api/contact",
        json={"name": "Bob", "email": "bob@example.com", "description": "From the old form"},
    )

    assert response.json()["data"]["contact"]["message"] == "From the old form"


def test_submission_validation(client: TestClient) -> None:
    response = client.post("/api/contact", json={"email": "not-an-email"})

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "email"}


def test_listing_requires_admin(
    client: TestClient,
    auth_headers: dict[str, str],
    admin_headers: dict[str, str],
) -> None:
    submit(client)

    assert client.get("/api/contacts").status_code == 401

    forbidden = client.get("/api/contacts", headers=auth_headers)
    assert forbidden.status_code == 403
    assert forbidden.json() == {"success": False, "message": "Admin privileges required"}

    allowed = client.get("/api/contacts", headers=admin_headers)
    assert allowed.status_code == 200
    assert [c["email"] for c in allowed.json()["data"]["contacts"]] == ["ada@example.com"]


def test_inactive_user_rejected(client: TestClient, make_token: Callable[..., str]) -> None:
    token = make_token(role="admin", isActive=False)

    response = client.get("/api/contacts", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "User not found or inactive"


def test_admin_deletes_contact(client: TestClient, admin_headers: dict[str, str]) -> None:
    contact_id = submit(client)["data"]["id"]

    response = client.delete(f"/api/contacts/{contact_id}", headers=admin_headers)

    assert response.json()["data"] == {"id": contact_id, "name": "Ada"}
    listing = client.get("/api/contacts", headers=admin_headers).json()["data"]
    assert listing["pagination"]["totalItems"] == 0
