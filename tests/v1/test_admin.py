# tests/v1/test_admin.py
"""Tests for admin channel and video control, audit and analytics."""

from fastapi import status

from vidshare.models import (
    AuditLog,
    CopyrightClaim,
    Flag,
    Notification,
    Playlist,
    PlaylistVideo,
    Strike,
    Video,
    VideoVote,
    Visibility,
    WatchLater,
)
from tests.factories import make_video


def test_verify_channel_is_audited(client, db_session, admin_token, channel) -> None:
    response = client.patch(
        f"/api/admin/channels/{channel.id}", json={"action": "verify"}, headers=admin_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["verified"] is True

    entry = db_session.query(AuditLog).one()
    assert entry.action == "CHANNEL_VERIFIED"
    assert entry.old_value["verified"] is False
    assert entry.new_value["verified"] is True


def test_suspend_channel_notifies_owner(client, db_session, admin_token, creator, channel) -> None:
    response = client.patch(
        f"/api/admin/channels/{channel.id}",
        json={"action": "suspend", "reason": "Repeated spam"},
        headers=admin_token,
    )
    assert response.json()["status"] == "SUSPENDED"
    note = db_session.query(Notification).filter_by(user_id=creator.id).one()
    assert note.message == "Repeated spam"


def test_channel_listing_filters(client, admin_token, channel) -> None:
    body = client.get("/api/admin/channels?verified=false", headers=admin_token).json()
    assert [c["id"] for c in body["items"]] == [channel.id]

    body = client.get("/api/admin/channels?status=SUSPENDED", headers=admin_token).json()
    assert body["items"] == []


def test_remove_video_with_strike(client, db_session, admin_token, video) -> None:
    response = client.patch(
        f"/api/admin/videos/{video.id}",
        json={"action": "remove", "apply_strike": True},
        headers=admin_token,
    )
    assert response.json()["visibility"] == "PRIVATE"
    assert db_session.query(Strike).count() == 1


def test_set_visibility_requires_value(client, admin_token, video) -> None:
    response = client.patch(
        f"/api/admin/videos/{video.id}", json={"action": "set_visibility"}, headers=admin_token
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_sees_private_videos(client, db_session, admin_token, channel) -> None:
    hidden = make_video(db_session, channel, visibility=Visibility.PRIVATE)
    body = client.get("/api/admin/videos?visibility=PRIVATE", headers=admin_token).json()
    assert [v["id"] for v in body["items"]] == [hidden.id]


def test_delete_video(client, db_session, admin_token, video) -> None:
    video_id = video.id
    response = client.delete(f"/api/admin/videos/{video_id}", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK

    db_session.expire_all()
    assert db_session.get(Video, video_id) is None
    assert db_session.query(AuditLog).filter_by(action="VIDEO_DELETED").one().target_id == video_id


def test_delete_video_cleans_up_dependents(
    client, db_session, admin_token, auth_token, other_auth_token, channel, video
) -> None:
    video_id = video.id
    survivor = make_video(db_session, channel, title="survivor")
    playlist = client.post(
        "/api/playlists", json={"title": "Mix", "visibility": "PUBLIC"}, headers=auth_token
    ).json()
    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json={"video_id": video_id}, headers=auth_token)
    client.post(url, json={"video_id": survivor.id}, headers=auth_token)
    client.post(f"/api/videos/{video_id}/like", json={"type": "LIKE"}, headers=auth_token)
    client.post("/api/user/watch-later", json={"video_id": video_id}, headers=auth_token)
    client.post(f"/api/videos/{video_id}/flag", json={"reason": "SPAM"}, headers=other_auth_token)
    client.post(
        "/api/copyright/claims",
        json={"video_id": video_id, "description": "This upload copies my original work."},
        headers=other_auth_token,
    )
    client.patch(
        f"/api/admin/videos/{video_id}",
        json={"action": "remove", "apply_strike": True},
        headers=admin_token,
    )

    response = client.delete(f"/api/admin/videos/{video_id}", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK

    db_session.expire_all()
    for model in (PlaylistVideo, VideoVote, WatchLater, Flag, CopyrightClaim, Notification):
        assert db_session.query(model).filter(model.video_id == video_id).count() == 0
    assert db_session.query(Strike).one().video_id is None
    assert db_session.get(Playlist, playlist["id"]).video_count == 1

    detail = client.get(f"/api/playlists/{playlist['id']}", headers=auth_token)
    assert detail.status_code == status.HTTP_200_OK
    assert detail.json()["video_count"] == 1
    assert [(e["video_id"], e["position"]) for e in detail.json()["entries"]] == [(survivor.id, 0)]


def test_audit_log_listing(client, admin_token, channel) -> None:
    client.patch(f"/api/admin/channels/{channel.id}", json={"action": "warn"}, headers=admin_token)
    body = client.get("/api/admin/audit-logs?target_type=Channel", headers=admin_token).json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["action"] == "CHANNEL_WARNED"


def test_analytics_overview(client, admin_token, video) -> None:
    response = client.get("/api/admin/analytics?period=7", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["period_days"] == 7
    assert body["total_videos"] == 1
    assert body["users_by_role"]["ADMIN"] == 1
    assert body["flags_by_status"] == {"PENDING": 0, "RESOLVED": 0, "REJECTED": 0}
