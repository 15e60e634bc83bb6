# tests/v1/test_views.py
"""Tests for deduplicated view counting."""

from fastapi import status

from vidshare.models import Channel, Visibility, WatchHistory
from tests.factories import make_video


def test_anonymous_view_sets_session_cookie(client, video) -> None:
    response = client.post(f"/api/videos/{video.id}/view")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "already_viewed": False, "view_count": 1}

    cookie = response.headers["set-cookie"]
    assert "viewed_videos=" in cookie
    assert "HttpOnly" in cookie
    assert "Max-Age=86400" in cookie
    # The cookie holds an opaque token, not the list of watched ids.
    assert f"viewed_videos={video.id}" not in cookie


def test_anonymous_repeat_view_is_deduplicated(client, video) -> None:
    client.post(f"/api/videos/{video.id}/view")
    response = client.post(f"/api/videos/{video.id}/view")
    assert response.json() == {"success": True, "already_viewed": True, "view_count": 1}


def test_forged_cookie_is_replaced(client, video) -> None:
    client.cookies.set("viewed_videos", "1,2,3")
    response = client.post(f"/api/videos/{video.id}/view")
    assert response.json()["already_viewed"] is False
    assert "viewed_videos=" in response.headers["set-cookie"]


def test_signed_in_views_dedupe_per_user(
    client, db_session, auth_token, other_auth_token, video
) -> None:
    first = client.post(f"/api/videos/{video.id}/view", headers=auth_token)
    again = client.post(f"/api/videos/{video.id}/view", headers=auth_token)
    other = client.post(f"/api/videos/{video.id}/view", headers=other_auth_token)

    assert first.json()["already_viewed"] is False
    assert again.json()["already_viewed"] is True
    assert other.json()["view_count"] == 2
    assert db_session.query(WatchHistory).count() == 2


def test_view_bumps_channel_total(client, db_session, auth_token, video) -> None:
    client.post(f"/api/videos/{video.id}/view", headers=auth_token)
    channel = db_session.get(Channel, video.channel_id)
    db_session.refresh(channel)
    assert channel.total_views == 1


def test_101st_distinct_video_evicts_the_first(client, db_session, auth_token, channel) -> None:
    videos = [make_video(db_session, channel, title=f"v{i}") for i in range(101)]
    for v in videos:
        assert client.post(f"/api/videos/{v.id}/view", headers=auth_token).json()[
            "already_viewed"
        ] is False

    response = client.post(f"/api/videos/{videos[0].id}/view", headers=auth_token)
    assert response.json()["already_viewed"] is False
    assert response.json()["view_count"] == 2


def test_private_video_hidden_from_strangers(client, db_session, auth_token, channel) -> None:
    hidden = make_video(db_session, channel, visibility=Visibility.PRIVATE)
    response = client.post(f"/api/videos/{hidden.id}/view", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/videos/{hidden.id}").status_code == status.HTTP_404_NOT_FOUND


def test_owner_can_see_private_video(client, db_session, creator_token, channel) -> None:
    hidden = make_video(db_session, channel, visibility=Visibility.PRIVATE)
    response = client.get(f"/api/videos/{hidden.id}", headers=creator_token)
    assert response.status_code == status.HTTP_200_OK
