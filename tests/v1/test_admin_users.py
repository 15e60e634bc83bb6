# tests/v1/test_admin_users.py
"""Tests for admin account management."""

from fastapi import status

from vidshare.models import AuditLog, Notification, Role, Strike, StrikeType, User, UserStatus
from tests.factories import TEST_PASSWORD


def _act(client, user_id, headers, **payload):
    return client.patch(f"/api/admin/users/{user_id}", json=payload, headers=headers)


def test_user_detail_lists_channels_and_active_strikes(
    client, db_session, admin_token, creator, channel, test_user
) -> None:
    db_session.add_all(
        [
            Strike(user_id=creator.id, channel_id=channel.id, type=StrikeType.SPAM, reason="spam"),
            Strike(
                user_id=creator.id,
                type=StrikeType.SPAM,
                reason="old",
                active=False,
            ),
        ]
    )
    db_session.commit()

    body = client.get(f"/api/admin/users/{creator.id}", headers=admin_token).json()
    assert body["status"] == "ACTIVE"
    assert [c["id"] for c in body["channels"]] == [channel.id]
    assert [s["reason"] for s in body["active_strikes"]] == ["spam"]
    assert body["flag_count"] == 0


def test_unknown_user_is_404(client, admin_token) -> None:
    response = client.get("/api/admin/users/424242", headers=admin_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "User not found"}


def test_non_admin_is_forbidden(client, auth_token, other_user) -> None:
    response = _act(client, other_user.id, auth_token, action="ban")
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_suspend_blocks_sign_in_and_is_audited(
    client, db_session, admin_token, auth_token, test_user
) -> None:
    response = _act(client, test_user.id, admin_token, action="suspend", reason="Abuse")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "SUSPENDED"

    entry = db_session.query(AuditLog).one()
    assert entry.action == "USER_SUSPENDED"
    assert entry.target_type == "User"
    assert entry.old_value["status"] == "ACTIVE"
    assert entry.new_value["status"] == "SUSPENDED"
    assert entry.notes == "Abuse"

    assert client.get("/api/auth/me", headers=auth_token).status_code == status.HTTP_403_FORBIDDEN
    login = client.post(
        "/api/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD}
    )
    assert login.status_code == status.HTTP_403_FORBIDDEN
    assert login.json() == {"error": "Account suspended"}


def test_ban_then_restore(client, db_session, admin_token, auth_token, test_user) -> None:
    _act(client, test_user.id, admin_token, action="ban")
    assert client.get("/api/auth/me", headers=auth_token).status_code == status.HTTP_403_FORBIDDEN

    response = _act(client, test_user.id, admin_token, action="restore")
    assert response.json()["status"] == "ACTIVE"
    assert client.get("/api/auth/me", headers=auth_token).status_code == status.HTTP_200_OK
    actions = [e.action for e in db_session.query(AuditLog).order_by(AuditLog.id)]
    assert actions == ["USER_BANNED", "USER_RESTORED"]


def test_admin_cannot_suspend_or_ban_themself(client, db_session, admin_token, admin_user) -> None:
    for action in ("suspend", "ban"):
        response = _act(client, admin_user.id, admin_token, action=action)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Cannot suspend or ban yourself"}

    db_session.expire_all()
    assert db_session.get(User, admin_user.id).status == UserStatus.ACTIVE
    assert db_session.query(AuditLog).count() == 0


def test_warn_notifies_and_costs_trust(client, db_session, admin_token, test_user) -> None:
    response = _act(client, test_user.id, admin_token, action="warn", reason="Be kind")
    assert response.json()["trust_score"] == 40

    note = db_session.query(Notification).filter_by(user_id=test_user.id).one()
    assert note.title == "Warning from Administration"
    assert note.message == "Be kind"


def test_change_role_requires_role(client, db_session, admin_token, test_user) -> None:
    response = _act(client, test_user.id, admin_token, action="change_role")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Role is required"}

    response = _act(client, test_user.id, admin_token, action="change_role", role="CREATOR")
    assert response.json()["role"] == "CREATOR"
    db_session.expire_all()
    assert db_session.get(User, test_user.id).role == Role.CREATOR


def test_trust_score_must_be_in_range(client, admin_token, test_user) -> None:
    response = _act(
        client, test_user.id, admin_token, action="update_trust_score", trust_score=101
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = _act(client, test_user.id, admin_token, action="update_trust_score")
    assert response.json() == {"error": "Trust score is required"}

    response = _act(
        client, test_user.id, admin_token, action="update_trust_score", trust_score=75
    )
    assert response.json()["trust_score"] == 75


def test_user_listing_filters_by_status(client, admin_token, test_user, other_user) -> None:
    _act(client, other_user.id, admin_token, action="suspend")

    body = client.get("/api/admin/users?status=SUSPENDED", headers=admin_token).json()
    assert [u["id"] for u in body["items"]] == [other_user.id]
    assert body["status_counts"]["SUSPENDED"] == 1
    assert body["status_counts"]["BANNED"] == 0
