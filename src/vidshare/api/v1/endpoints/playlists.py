# src/vidshare/api/v1/endpoints/playlists.py
"""Playlist endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from vidshare.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep, ensure_owner
from vidshare.models import Playlist
from vidshare.schemas.common import MessageResponse, Page
from vidshare.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistReorder,
    PlaylistResponse,
    PlaylistUpdate,
    PlaylistVideoRequest,
)
from vidshare.services import playlists
from vidshare.services.listing import paginate

router = APIRouter(prefix="/playlists", tags=["playlists"])

_MODIFY_DENIED = "You don't have permission to modify this playlist"


@router.get("", response_model=Page[PlaylistResponse])
async def list_playlists(
    current_user: OptionalUserDep,
    db: SessionDep,
    user_id: int | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List a user's playlists; defaults to the caller's own."""
    owner_id = user_id if user_id is not None else getattr(current_user, "id", None)
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="user_id is required",
        )
    return paginate(playlists.user_playlists(db, owner_id, current_user), page, limit)


@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    payload: PlaylistCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Playlist:
    """Create a playlist owned by the caller."""
    return playlists.create_playlist(db, current_user, payload)


@router.get("/{playlist_id}", response_model=PlaylistDetailResponse)
async def get_playlist(
    playlist_id: int,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> Playlist:
    """Return a playlist with its ordered videos."""
    return playlists.get_playlist(db, playlist_id, current_user)


@router.patch("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: int,
    payload: PlaylistUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Playlist:
    """Edit a playlist's title, description or visibility."""
    playlist = playlists.find_playlist(db, playlist_id)
    ensure_owner(playlist.user_id, current_user, "You don't have permission to edit this playlist")
    return playlists.update_playlist(db, playlist, payload)


@router.delete("/{playlist_id}", response_model=MessageResponse)
async def delete_playlist(
    playlist_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete a playlist."""
    playlist = playlists.find_playlist(db, playlist_id)
    ensure_owner(
        playlist.user_id, current_user, "You don't have permission to delete this playlist"
    )
    playlists.delete_playlist(db, playlist)
    return MessageResponse(message="Playlist deleted")


@router.post(
    "/{playlist_id}/videos",
    response_model=PlaylistDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_playlist_video(
    playlist_id: int,
    payload: PlaylistVideoRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Playlist:
    """Append a video to the playlist."""
    playlist = playlists.find_playlist(db, playlist_id)
    ensure_owner(playlist.user_id, current_user, _MODIFY_DENIED)
    playlists.add_video(db, current_user, playlist, payload.video_id)
    return playlist


@router.delete("/{playlist_id}/videos", response_model=PlaylistDetailResponse)
async def remove_playlist_video(
    playlist_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    video_id: int = Query(...),
) -> Playlist:
    """Remove a video from the playlist."""
    playlist = playlists.find_playlist(db, playlist_id)
    ensure_owner(playlist.user_id, current_user, _MODIFY_DENIED)
    playlists.remove_video(db, playlist, video_id)
    return playlist


@router.patch("/{playlist_id}/videos", response_model=PlaylistDetailResponse)
async def reorder_playlist(
    playlist_id: int,
    payload: PlaylistReorder,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Playlist:
    """Set a new order for the playlist's videos."""
    playlist = playlists.find_playlist(db, playlist_id)
    ensure_owner(playlist.user_id, current_user, _MODIFY_DENIED)
    return playlists.reorder(db, playlist, payload.video_ids)
