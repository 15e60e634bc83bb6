# tests/v1/test_subscriptions.py
"""Tests for channel subscriptions and the notifications they produce."""

from fastapi import status

from vidshare.models import Channel, Notification


def test_toggle_subscription(client, db_session, auth_token, channel) -> None:
    first = client.post("/api/subscriptions", json={"channel_id": channel.id}, headers=auth_token)
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"subscribed": True, "subscriber_count": 1}

    second = client.post("/api/subscriptions", json={"channel_id": channel.id}, headers=auth_token)
    assert second.json() == {"subscribed": False, "subscriber_count": 0}

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).subscriber_count == 0


def test_subscribe_notifies_owner(client, creator_token, auth_token, channel) -> None:
    client.post("/api/subscriptions", json={"channel_id": channel.id}, headers=auth_token)

    tray = client.get("/api/notifications", headers=creator_token).json()
    assert tray["pagination"]["total"] == 1
    assert tray["items"][0]["type"] == "SUBSCRIPTION"
    assert tray["items"][0]["read"] is False


def test_cannot_subscribe_to_own_channel(client, creator_token, channel) -> None:
    response = client.post(
        "/api/subscriptions", json={"channel_id": channel.id}, headers=creator_token
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_list_and_update_level(client, auth_token, channel) -> None:
    client.post("/api/subscriptions", json={"channel_id": channel.id}, headers=auth_token)

    listing = client.get("/api/subscriptions", headers=auth_token).json()
    assert listing["items"][0]["channel"]["id"] == channel.id

    updated = client.patch(
        "/api/subscriptions",
        json={"channel_id": channel.id, "notification_level": "ALL"},
        headers=auth_token,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["notification_level"] == "ALL"


def test_update_level_when_not_subscribed(client, auth_token, channel) -> None:
    response = client.patch(
        "/api/subscriptions",
        json={"channel_id": channel.id, "notification_level": "NONE"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_notifications_read(client, db_session, auth_token, test_user) -> None:
    for i in range(2):
        db_session.add(Notification(user_id=test_user.id, title=f"t{i}", message="hello"))
    db_session.commit()

    response = client.patch("/api/notifications", json={"all": True}, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK

    unread = client.get("/api/notifications?unread_only=true", headers=auth_token).json()
    assert unread["items"] == []


def test_mark_read_requires_target(client, auth_token) -> None:
    response = client.patch("/api/notifications", json={}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
