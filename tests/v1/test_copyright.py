# tests/v1/test_copyright.py
"""Tests for copyright claims, counter-notices and admin rulings."""

from fastapi import status

from vidshare.models import Channel, ChannelStatus, Strike, Video, Visibility
from tests.factories import make_video

DESCRIPTION = "This upload copies my original music video."
STATEMENT = "I licensed this footage and hold written permission from the owner."


def _claim(client, video_id, headers):
    return client.post(
        "/api/copyright/claims",
        json={"video_id": video_id, "description": DESCRIPTION},
        headers=headers,
    )


def test_file_claim_and_owner_sees_it(client, auth_token, creator_token, video) -> None:
    response = _claim(client, video.id, auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "PENDING"

    against_me = client.get("/api/copyright/claims", headers=creator_token).json()
    assert [c["id"] for c in against_me["items"]] == [response.json()["id"]]


def test_cannot_claim_own_video(client, creator_token, video) -> None:
    response = _claim(client, video.id, creator_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_counter_notice_by_owner_only(client, auth_token, creator_token, video) -> None:
    claim_id = _claim(client, video.id, auth_token).json()["id"]
    url = f"/api/copyright/claims/{claim_id}/counter-notice"

    denied = client.post(url, json={"statement": STATEMENT}, headers=auth_token)
    assert denied.status_code == status.HTTP_403_FORBIDDEN

    accepted = client.post(url, json={"statement": STATEMENT}, headers=creator_token)
    assert accepted.status_code == status.HTTP_200_OK
    assert accepted.json()["status"] == "COUNTER_NOTICED"


def test_uphold_with_block_and_strike(client, db_session, auth_token, admin_token, video) -> None:
    claim_id = _claim(client, video.id, auth_token).json()["id"]
    response = client.patch(
        f"/api/admin/copyright/claims/{claim_id}",
        json={"decision": "uphold", "action": "block", "apply_strike": True},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "UPHELD"

    db_session.expire_all()
    assert db_session.get(Video, video.id).visibility == Visibility.PRIVATE
    assert db_session.query(Strike).one().type.value == "COPYRIGHT"


def test_reject_restores_visibility(client, db_session, auth_token, admin_token, video) -> None:
    claim_id = _claim(client, video.id, auth_token).json()["id"]
    db_session.get(Video, video.id).visibility = Visibility.PRIVATE
    db_session.commit()

    response = client.patch(
        f"/api/admin/copyright/claims/{claim_id}",
        json={"decision": "reject"},
        headers=admin_token,
    )
    assert response.json()["status"] == "REJECTED"
    db_session.expire_all()
    assert db_session.get(Video, video.id).visibility == Visibility.PUBLIC


def test_admin_claim_queue_counts(client, auth_token, admin_token, video) -> None:
    _claim(client, video.id, auth_token)
    body = client.get("/api/admin/copyright/claims", headers=admin_token).json()
    assert body["status_counts"]["PENDING"] == 1
    assert body["status_counts"]["UPHELD"] == 0


def test_three_copyright_strikes_terminate_channel(
    client, db_session, auth_token, admin_token, channel
) -> None:
    for i in range(3):
        target = make_video(db_session, channel, title=f"copy {i}")
        claim_id = _claim(client, target.id, auth_token).json()["id"]
        client.patch(
            f"/api/admin/copyright/claims/{claim_id}",
            json={"decision": "uphold", "apply_strike": True},
            headers=admin_token,
        )

    db_session.expire_all()
    assert db_session.get(Channel, channel.id).status == ChannelStatus.TERMINATED
