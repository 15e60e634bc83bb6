# src/vidshare/services/playlists.py
"""Playlist management."""
from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from vidshare.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from vidshare.db.session import atomic
from vidshare.db.time import utcnow
from vidshare.models import Playlist, PlaylistVideo, User, Visibility
from vidshare.schemas.playlist import PlaylistCreate, PlaylistUpdate
from vidshare.services.catalog import get_visible_video
from vidshare.services.counters import adjust_counters

__all__ = [
    "create_playlist",
    "user_playlists",
    "get_playlist",
    "find_playlist",
    "update_playlist",
    "delete_playlist",
    "add_video",
    "remove_video",
    "reorder",
]


def create_playlist(db: Session, user: User, data: PlaylistCreate) -> Playlist:
    playlist = Playlist(
        user_id=user.id,
        title=data.title,
        description=data.description,
        visibility=data.visibility,
    )
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    return playlist


def user_playlists(db: Session, owner_id: int, viewer: User | None) -> Query:
    """Query ``owner_id``'s playlists; other viewers see only public ones."""
    query = db.query(Playlist).filter(Playlist.user_id == owner_id)
    if viewer is None or viewer.id != owner_id:
        query = query.filter(Playlist.visibility == Visibility.PUBLIC)
    return query.order_by(Playlist.updated_at.desc(), Playlist.id.desc())


def get_playlist(db: Session, playlist_id: int, viewer: User | None) -> Playlist:
    """Return a playlist the viewer may read.

    Raises:
        NotFoundError: If the playlist does not exist.
        PermissionDeniedError: If it is private and the viewer is not its owner.
    """
    playlist = find_playlist(db, playlist_id)
    if playlist.visibility == Visibility.PRIVATE and (
        viewer is None or (viewer.id != playlist.user_id and not viewer.is_admin)
    ):
        raise PermissionDeniedError("This playlist is private")
    return playlist


def find_playlist(db: Session, playlist_id: int) -> Playlist:
    playlist = db.get(Playlist, playlist_id)
    if playlist is None:
        raise NotFoundError("Playlist not found")
    return playlist


def update_playlist(db: Session, playlist: Playlist, data: PlaylistUpdate) -> Playlist:
    """Apply partial updates to a playlist."""
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None and key != "description":
            continue
        setattr(playlist, key, value)
    db.commit()
    db.refresh(playlist)
    return playlist


def delete_playlist(db: Session, playlist: Playlist) -> None:
    db.delete(playlist)
    db.commit()


def add_video(db: Session, user: User, playlist: Playlist, video_id: int) -> PlaylistVideo:
    """Append a video to the end of the playlist.

    Raises:
        NotFoundError: If the video does not exist or is hidden from the caller.
        ValidationFailedError: If the video is already in the playlist.
    """
    video = get_visible_video(db, video_id, user)
    exists = (
        db.query(PlaylistVideo)
        .filter(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video.id)
        .first()
    )
    if exists is not None:
        raise ValidationFailedError("Video already in playlist")

    with atomic(db):
        last = (
            db.query(func.max(PlaylistVideo.position))
            .filter(PlaylistVideo.playlist_id == playlist.id)
            .scalar()
        )
        entry = PlaylistVideo(
            playlist_id=playlist.id,
            video_id=video.id,
            position=0 if last is None else last + 1,
        )
        db.add(entry)
        db.flush()
        adjust_counters(db, Playlist, playlist.id, video_count=1)
    db.refresh(entry)
    db.refresh(playlist)
    return entry


def remove_video(db: Session, playlist: Playlist, video_id: int) -> None:
    """Drop a video and close the gap it leaves in the ordering."""
    entry = (
        db.query(PlaylistVideo)
        .filter(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
        .first()
    )
    if entry is None:
        raise NotFoundError("Video not in playlist")

    with atomic(db):
        removed_position = entry.position
        db.delete(entry)
        db.flush()
        db.query(PlaylistVideo).filter(
            PlaylistVideo.playlist_id == playlist.id,
            PlaylistVideo.position > removed_position,
        ).update(
            {PlaylistVideo.position: PlaylistVideo.position - 1},
            synchronize_session=False,
        )
        adjust_counters(db, Playlist, playlist.id, video_count=-1)
    db.refresh(playlist)


def reorder(db: Session, playlist: Playlist, video_ids: list[int]) -> Playlist:
    """Rewrite positions to follow ``video_ids``.

    Raises:
        ValidationFailedError: If ``video_ids`` is not exactly the playlist's videos.
    """
    entries = {
        entry.video_id: entry
        for entry in db.query(PlaylistVideo).filter(PlaylistVideo.playlist_id == playlist.id)
    }
    if len(video_ids) != len(set(video_ids)) or set(video_ids) != set(entries):
        raise ValidationFailedError("video_ids must list every video in the playlist exactly once")

    with atomic(db):
        for position, video_id in enumerate(video_ids):
            entries[video_id].position = position
        playlist.updated_at = utcnow()
    db.refresh(playlist)
    return playlist
