# tests/v1/test_strikes.py
"""Tests for admin strike management."""

import pytest
from fastapi import status

from vidshare.models import AuditLog, Channel, ChannelStatus, Notification, Strike


def _issue(client, admin_token, creator, channel, **overrides):
    body = {
        "user_id": creator.id,
        "channel_id": channel.id,
        "type": "SPAM",
        "reason": "Repeated spam uploads",
        **overrides,
    }
    return client.post("/api/admin/strikes", json=body, headers=admin_token)


def test_issue_strike(client, db_session, admin_token, creator, channel) -> None:
    response = _issue(client, admin_token, creator, channel)
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["severity"] == "STRIKE"
    assert body["active"] is True
    assert body["expires_at"] is not None

    note = db_session.query(Notification).filter_by(user_id=creator.id).one()
    assert note.title == "Strike Issued"
    assert db_session.query(AuditLog).filter_by(action="STRIKE_ISSUED").count() == 1


def test_warning_uses_warning_title(client, db_session, admin_token, creator, channel) -> None:
    _issue(client, admin_token, creator, channel, severity="WARNING")
    note = db_session.query(Notification).filter_by(user_id=creator.id).one()
    assert note.title == "Warning Issued"


def test_unknown_user(client, admin_token, creator, channel) -> None:
    response = _issue(client, admin_token, creator, channel, user_id=creator.id + 999)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "User not found"}


def test_third_strike_suspends_and_removal_restores(
    client, db_session, admin_token, creator, channel
) -> None:
    ids = [_issue(client, admin_token, creator, channel).json()["id"] for _ in range(3)]
    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.SUSPENDED

    response = client.patch(
        f"/api/admin/strikes/{ids[0]}", json={"action": "remove"}, headers=admin_token
    )
    assert response.json()["active"] is False

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.ACTIVE


def _suspend_with_strikes(client, db_session, admin_token, creator, channel):
    ids = [_issue(client, admin_token, creator, channel).json()["id"] for _ in range(3)]
    db_session.expire_all()
    suspended = db_session.get(Channel, channel.id)
    assert suspended.status == ChannelStatus.SUSPENDED
    assert suspended.suspended_by_strikes is True
    return ids


@pytest.mark.parametrize(
    "method, body",
    [
        ("patch", {"action": "expire"}),
        ("patch", {"action": "update_severity", "severity": "WARNING"}),
        ("delete", None),
    ],
)
def test_any_strike_change_can_lift_suspension(
    client, db_session, admin_token, creator, channel, method, body
) -> None:
    ids = _suspend_with_strikes(client, db_session, admin_token, creator, channel)

    url = f"/api/admin/strikes/{ids[0]}"
    if method == "patch":
        response = client.patch(url, json=body, headers=admin_token)
    else:
        response = client.delete(url, headers=admin_token)
    assert response.status_code == status.HTTP_200_OK

    db_session.expire_all()
    restored = db_session.get(Channel, channel.id)
    assert restored.status == ChannelStatus.ACTIVE
    assert restored.suspended_by_strikes is False


def test_regrading_a_warning_up_suspends(
    client, db_session, admin_token, creator, channel
) -> None:
    _issue(client, admin_token, creator, channel)
    _issue(client, admin_token, creator, channel)
    warning_id = _issue(client, admin_token, creator, channel, severity="WARNING").json()["id"]
    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.ACTIVE

    client.patch(
        f"/api/admin/strikes/{warning_id}",
        json={"action": "update_severity", "severity": "STRIKE"},
        headers=admin_token,
    )

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.SUSPENDED


def test_manual_suspension_survives_strike_removal(
    client, db_session, admin_token, creator, channel
) -> None:
    client.patch(
        f"/api/admin/channels/{channel.id}", json={"action": "suspend"}, headers=admin_token
    )
    strike_id = _issue(client, admin_token, creator, channel).json()["id"]

    client.patch(
        f"/api/admin/strikes/{strike_id}", json={"action": "remove"}, headers=admin_token
    )
    client.delete(f"/api/admin/strikes/{strike_id}", headers=admin_token)

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.SUSPENDED


def test_admin_restore_clears_strike_suspension_marker(
    client, db_session, admin_token, creator, channel
) -> None:
    _suspend_with_strikes(client, db_session, admin_token, creator, channel)
    client.patch(
        f"/api/admin/channels/{channel.id}", json={"action": "restore"}, headers=admin_token
    )
    client.patch(
        f"/api/admin/channels/{channel.id}", json={"action": "suspend"}, headers=admin_token
    )

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).suspended_by_strikes is False


def test_expire_and_regrade(client, admin_token, creator, channel) -> None:
    strike_id = _issue(client, admin_token, creator, channel).json()["id"]
    url = f"/api/admin/strikes/{strike_id}"

    missing = client.patch(url, json={"action": "update_severity"}, headers=admin_token)
    assert missing.status_code == status.HTTP_400_BAD_REQUEST
    assert missing.json() == {"error": "Severity is required"}

    regraded = client.patch(
        url, json={"action": "update_severity", "severity": "WARNING"}, headers=admin_token
    )
    assert regraded.json()["severity"] == "WARNING"

    expired = client.patch(url, json={"action": "expire"}, headers=admin_token)
    assert expired.json()["active"] is False


def test_listing_counts_active_by_type(client, admin_token, creator, channel) -> None:
    first = _issue(client, admin_token, creator, channel).json()["id"]
    _issue(client, admin_token, creator, channel, type="MISLEADING")
    client.patch(f"/api/admin/strikes/{first}", json={"action": "expire"}, headers=admin_token)

    body = client.get(f"/api/admin/strikes?user_id={creator.id}", headers=admin_token).json()
    assert body["pagination"]["total"] == 2
    assert body["status_counts"]["SPAM"] == 0
    assert body["status_counts"]["MISLEADING"] == 1

    active_only = client.get("/api/admin/strikes?active=true", headers=admin_token).json()
    assert [s["type"] for s in active_only["items"]] == ["MISLEADING"]


def test_detail_and_delete(client, db_session, admin_token, creator, channel) -> None:
    strike_id = _issue(client, admin_token, creator, channel).json()["id"]

    detail = client.get(f"/api/admin/strikes/{strike_id}", headers=admin_token).json()
    assert detail["user"]["id"] == creator.id

    deleted = client.delete(f"/api/admin/strikes/{strike_id}", headers=admin_token)
    assert deleted.status_code == status.HTTP_200_OK
    assert db_session.query(Strike).count() == 0
    missing = client.get(f"/api/admin/strikes/{strike_id}", headers=admin_token)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_requires_admin(client, creator_token) -> None:
    response = client.get("/api/admin/strikes", headers=creator_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
