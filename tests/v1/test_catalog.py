# tests/v1/test_catalog.py
"""Tests for channel and video creation and public listings."""

from fastapi import status

from vidshare.models import Role, Visibility
from tests.factories import make_video


def test_create_channel_promotes_user(client, db_session, auth_token, test_user) -> None:
    response = client.post(
        "/api/channels",
        json={"name": "My Channel", "handle": "my_channel"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["owner_id"] == test_user.id

    db_session.refresh(test_user)
    assert test_user.role == Role.CREATOR


def test_second_channel_rejected(client, creator_token, channel) -> None:
    response = client.post(
        "/api/channels",
        json={"name": "Another", "handle": "another_one"},
        headers=creator_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_duplicate_handle_rejected(client, auth_token, channel) -> None:
    response = client.post(
        "/api/channels",
        json={"name": "Copycat", "handle": channel.handle},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "handle" in response.json()["error"]


def test_create_video_defaults_to_private(client, creator_token, channel) -> None:
    response = client.post(
        "/api/videos",
        json={"channel_id": channel.id, "title": "Draft"},
        headers=creator_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["visibility"] == "PRIVATE"
    assert response.json()["view_count"] == 0


def test_create_video_on_foreign_channel(client, auth_token, channel) -> None:
    response = client.post(
        "/api/videos",
        json={"channel_id": channel.id, "title": "Not mine"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_public_listing_hides_private(client, db_session, channel) -> None:
    shown = make_video(db_session, channel, title="shown")
    make_video(db_session, channel, title="hidden", visibility=Visibility.PRIVATE)

    body = client.get("/api/videos").json()
    assert [item["id"] for item in body["items"]] == [shown.id]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1}


def test_listing_limit_capped(client) -> None:
    response = client.get("/api/videos?limit=500")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
