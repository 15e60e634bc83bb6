# src/vidshare/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.moderation import (
    ClaimStatus,
    ClaimType,
    FlagReason,
    FlagStatus,
    StrikeSeverity,
    StrikeType,
)
from vidshare.schemas.auth import UserSummary
from vidshare.schemas.video import VideoResponse

FlagDecisionKind = Literal["dismiss", "warn", "age_restrict", "remove", "remove_with_strike"]
ClaimDecisionKind = Literal["uphold", "partial", "reject"]


class FlagCreate(BaseModel):
    """Schema for reporting a video."""

    reason: FlagReason
    comment: str | None = Field(None, max_length=500)


class FlagResponse(BaseModel):
    """Schema for flag information returned by the API."""

    id: int
    reporter_id: int
    video_id: int
    reason: FlagReason
    comment: str | None
    status: FlagStatus
    decision: str | None
    notes: str | None
    reviewed_by: int | None
    reviewed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FlagDetailResponse(FlagResponse):
    """Flag with the reported video and reporter."""

    video: VideoResponse
    reporter: UserSummary


class FlagDecision(BaseModel):
    """Admin ruling on a pending flag."""

    decision: FlagDecisionKind
    notes: str | None = None
    strike_type: StrikeType | None = None
    strike_severity: StrikeSeverity | None = None


class ClaimCreate(BaseModel):
    """Schema for filing a rights claim against a video."""

    video_id: int
    claim_type: ClaimType = ClaimType.COPYRIGHT
    description: str = Field(..., min_length=10, max_length=5000)


class CounterNoticeRequest(BaseModel):
    """Video owner's dispute of a claim."""

    statement: str = Field(..., min_length=20, max_length=5000)


class ClaimResponse(BaseModel):
    """Schema for copyright claim information returned by the API."""

    id: int
    video_id: int
    claimant_id: int
    claim_type: ClaimType
    description: str
    status: ClaimStatus
    decision: str | None
    counter_notice: str | None
    counter_noticed_at: datetime | None
    decided_by: int | None
    decided_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClaimDetailResponse(ClaimResponse):
    """Claim with the claimed video."""

    video: VideoResponse


class ClaimDecision(BaseModel):
    """Admin ruling on a claim."""

    decision: ClaimDecisionKind
    notes: str | None = None
    action: Literal["block", "no_action"] | None = None
    apply_strike: bool = False


class StrikeResponse(BaseModel):
    """A strike recorded against a creator."""

    id: int
    user_id: int
    channel_id: int | None
    video_id: int | None
    type: StrikeType
    severity: StrikeSeverity
    reason: str
    active: bool
    expires_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StrikeCreate(BaseModel):
    """Admin-issued strike outside the flag and claim workflows."""

    user_id: int
    channel_id: int | None = None
    video_id: int | None = None
    type: StrikeType
    severity: StrikeSeverity = StrikeSeverity.STRIKE
    reason: str = Field(..., min_length=1, max_length=1000)
    expires_in_days: int = Field(90, ge=1, le=3650)


class StrikeUpdate(BaseModel):
    """Admin change to an existing strike."""

    action: Literal["remove", "expire", "update_severity"]
    severity: StrikeSeverity | None = None
    notes: str | None = None


class StrikeDetailResponse(StrikeResponse):
    """Strike with the account it was issued to."""

    user: UserSummary
    issued_by: int | None
