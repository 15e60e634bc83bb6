# src/vidshare/api/v1/endpoints/channels.py
"""Channel endpoints."""

from fastapi import APIRouter, status

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.models import Channel
from vidshare.schemas.video import ChannelCreate, ChannelResponse
from vidshare.services import catalog

router = APIRouter(prefix="/channels", tags=["channels"])


@router.post("", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
async def create_channel(
    channel_data: ChannelCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Channel:
    """Create the caller's channel."""
    return catalog.create_channel(db, current_user, channel_data)


@router.get("/{channel_id}", response_model=ChannelResponse)
async def get_channel(channel_id: int, db: SessionDep) -> Channel:
    """Return a channel's public profile."""
    return catalog.get_channel(db, channel_id)
