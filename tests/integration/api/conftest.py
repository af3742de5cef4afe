"""Factories that create documents through the API."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def create_track(client: TestClient, auth_headers: dict[str, str]) -> Callable[..., dict[str, Any]]:
    def _create(**fields: Any) -> dict[str, Any]:
        response = client.post(
            "/api/tracks", json={"title": "Untitled", **fields}, headers=auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_playlist(
    client: TestClient, auth_headers: dict[str, str]
) -> Callable[..., dict[str, Any]]:
    def _create(**fields: Any) -> dict[str, Any]:
        response = client.post(
            "/api/playlists", json={"title": "List", **fields}, headers=auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def fetch_playlist(client: TestClient) -> Callable[[str], dict[str, Any]]:
    """Playlist as stored: track ids, not expanded."""

    def _fetch(playlist_id: str) -> dict[str, Any]:
        response = client.get(f"/api/playlists/{playlist_id}", params={"expand": "false"})
        assert response.status_code == 200
        return response.json()["data"]

    return _fetch


@pytest.fixture
def create_page(client: TestClient, auth_headers: dict[str, str]) -> Callable[..., dict[str, Any]]:
    def _create(**fields: Any) -> dict[str, Any]:
        body = {
            "title": "About us",
            "description": "Who we are",
            "imageUrl": "https://cdn.example.com/about.png",
            "thumbnailUrl": "https://cdn.example.com/about-thumb.png",
            "editorType": "quill",
            "content": "# About",
            **fields,
        }
        response = client.post("/api/pages", json=body, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
