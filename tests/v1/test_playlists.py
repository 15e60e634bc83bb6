# tests/v1/test_playlists.py
"""Tests for playlists and their ordering."""

from fastapi import status

from tests.factories import make_video


def _create(client, headers, **overrides):
    payload = {"title": "Favourites", "visibility": "PUBLIC", **overrides}
    response = client.post("/api/playlists", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def _positions(detail):
    return [(entry["video_id"], entry["position"]) for entry in detail["entries"]]


def test_add_videos_in_order(client, db_session, auth_token, channel) -> None:
    playlist = _create(client, auth_token)
    a = make_video(db_session, channel, title="a")
    b = make_video(db_session, channel, title="b")

    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json={"video_id": a.id}, headers=auth_token)
    response = client.post(url, json={"video_id": b.id}, headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    assert _positions(response.json()) == [(a.id, 0), (b.id, 1)]
    assert response.json()["video_count"] == 2


def test_duplicate_video_rejected(client, auth_token, video) -> None:
    playlist = _create(client, auth_token)
    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json={"video_id": video.id}, headers=auth_token)
    response = client.post(url, json={"video_id": video.id}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_remove_closes_gap(client, db_session, auth_token, channel) -> None:
    playlist = _create(client, auth_token)
    videos = [make_video(db_session, channel, title=t) for t in "abc"]
    url = f"/api/playlists/{playlist['id']}/videos"
    for v in videos:
        client.post(url, json={"video_id": v.id}, headers=auth_token)

    response = client.delete(f"{url}?video_id={videos[0].id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert _positions(response.json()) == [(videos[1].id, 0), (videos[2].id, 1)]
    assert response.json()["video_count"] == 2


def test_reorder(client, db_session, auth_token, channel) -> None:
    playlist = _create(client, auth_token)
    videos = [make_video(db_session, channel, title=t) for t in "abc"]
    url = f"/api/playlists/{playlist['id']}/videos"
    for v in videos:
        client.post(url, json={"video_id": v.id}, headers=auth_token)

    order = [videos[2].id, videos[0].id, videos[1].id]
    response = client.patch(url, json={"video_ids": order}, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert _positions(response.json()) == [(vid, i) for i, vid in enumerate(order)]


def test_reorder_must_be_permutation(client, auth_token, video) -> None:
    playlist = _create(client, auth_token)
    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json={"video_id": video.id}, headers=auth_token)

    response = client.patch(url, json={"video_ids": [video.id, video.id]}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_private_playlist_hidden_from_others(client, auth_token, other_auth_token) -> None:
    playlist = _create(client, auth_token, visibility="PRIVATE")

    assert client.get(f"/api/playlists/{playlist['id']}", headers=auth_token).status_code == 200
    response = client.get(f"/api/playlists/{playlist['id']}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "This playlist is private"}


def test_only_owner_can_modify(client, auth_token, other_auth_token, video) -> None:
    playlist = _create(client, auth_token)

    response = client.post(
        f"/api/playlists/{playlist['id']}/videos",
        json={"video_id": video.id},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.delete(f"/api/playlists/{playlist['id']}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_listing_shows_public_only_to_others(
    client, auth_token, other_auth_token, test_user
) -> None:
    _create(client, auth_token, title="Public one")
    _create(client, auth_token, title="Private one", visibility="PRIVATE")

    own = client.get("/api/playlists", headers=auth_token).json()
    assert own["pagination"]["total"] == 2

    theirs = client.get(f"/api/playlists?user_id={test_user.id}", headers=other_auth_token).json()
    assert [p["title"] for p in theirs["items"]] == ["Public one"]


def test_update_and_delete(client, auth_token) -> None:
    playlist = _create(client, auth_token)
    updated = client.patch(
        f"/api/playlists/{playlist['id']}", json={"title": "Renamed"}, headers=auth_token
    )
    assert updated.json()["title"] == "Renamed"

    deleted = client.delete(f"/api/playlists/{playlist['id']}", headers=auth_token)
    assert deleted.status_code == status.HTTP_200_OK
    assert client.get(f"/api/playlists/{playlist['id']}", headers=auth_token).status_code == 404
