# src/vidshare/services/moderation.py
"""Moderation services: viewer flags, copyright claims and strikes."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from vidshare.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from vidshare.core.settings import settings
from vidshare.db.session import atomic
from vidshare.db.time import days_from_now, utcnow
from vidshare.models import (
    Channel,
    ChannelStatus,
    ClaimStatus,
    CopyrightClaim,
    Flag,
    FlagStatus,
    Strike,
    StrikeSeverity,
    StrikeType,
    User,
    Video,
    Visibility,
)
from vidshare.schemas.moderation import (
    ClaimCreate,
    ClaimDecision,
    FlagCreate,
    FlagDecision,
    StrikeCreate,
    StrikeUpdate,
)
from vidshare.services.audit import record_audit
from vidshare.services.notifications import notify

logger = logging.getLogger(__name__)

_FLAG_OUTCOMES = {
    "dismiss": "No violation found",
    "warn": "Warning issued",
    "age_restrict": "Content age-restricted",
    "remove": "Content removed",
    "remove_with_strike": "Content removed with strike",
}

_CLAIM_OUTCOMES = {
    "uphold": (ClaimStatus.UPHELD, "Claim upheld - copyright violation confirmed"),
    "partial": (ClaimStatus.UPHELD, "Claim partially upheld"),
    "reject": (ClaimStatus.REJECTED, "Claim rejected - no copyright violation found"),
}

_DECIDABLE_CLAIM_STATES = (ClaimStatus.PENDING, ClaimStatus.COUNTER_NOTICED)
_DISPUTABLE_CLAIM_STATES = (ClaimStatus.PENDING, ClaimStatus.UPHELD)

_STRIKE_AUDIT_ACTIONS = {
    "remove": "STRIKE_REMOVED",
    "expire": "STRIKE_EXPIRED",
    "update_severity": "STRIKE_UPDATED",
}


def _active_strikes(db: Session) -> Query:
    now = utcnow()
    return db.query(Strike).filter(
        Strike.active.is_(True),
        or_(Strike.expires_at.is_(None), Strike.expires_at > now),
    )


def _standing_strikes(db: Session, user_id: int) -> int:
    return (
        _active_strikes(db)
        .filter(Strike.user_id == user_id, Strike.severity == StrikeSeverity.STRIKE)
        .count()
    )


def _add_strike(
    db: Session,
    admin: User,
    *,
    user_id: int,
    channel: Channel | None,
    video_id: int | None,
    strike_type: StrikeType,
    severity: StrikeSeverity,
    reason: str,
    expires_in_days: int,
) -> Strike:
    strike = Strike(
        user_id=user_id,
        channel_id=channel.id if channel is not None else None,
        video_id=video_id,
        type=strike_type,
        severity=severity,
        reason=reason,
        issued_by=admin.id,
        expires_at=days_from_now(expires_in_days),
    )
    db.add(strike)
    db.flush()
    return strike


def _escalate(db: Session, strike: Strike, channel: Channel | None) -> int:
    """Apply the strike threshold to ``channel`` and return the count that was checked."""
    threshold = settings.strike_suspension_threshold
    if strike.type == StrikeType.COPYRIGHT and channel is not None:
        count = (
            _active_strikes(db)
            .filter(Strike.channel_id == channel.id, Strike.type == StrikeType.COPYRIGHT)
            .count()
        )
        if count >= threshold:
            channel.status = ChannelStatus.TERMINATED
            logger.warning("Channel %s terminated after %s copyright strikes", channel.id, count)
        return count

    count = _standing_strikes(db, strike.user_id)
    if channel is not None and count >= threshold and channel.status == ChannelStatus.ACTIVE:
        channel.status = ChannelStatus.SUSPENDED
        channel.suspended_by_strikes = True
        logger.warning("Channel %s suspended after %s strikes", channel.id, count)
    return count


def _lift_strike_suspension(db: Session, user_id: int, channel: Channel | None) -> bool:
    """Reactivate a strike-suspended ``channel`` once its owner is under the threshold.

    Suspensions applied by an administrator are left alone.
    """
    if (
        channel is None
        or channel.status != ChannelStatus.SUSPENDED
        or not channel.suspended_by_strikes
    ):
        return False
    db.flush()
    if _standing_strikes(db, user_id) >= settings.strike_suspension_threshold:
        return False
    channel.status = ChannelStatus.ACTIVE
    channel.suspended_by_strikes = False
    logger.info("Channel %s restored after its owner fell under the strike threshold", channel.id)
    return True


class ModerationService:
    """Service handling moderation logic and state transitions."""

    # --- Flags ---------------------------------------------------------------------
    @staticmethod
    def create_flag(db: Session, reporter: User, video: Video, data: FlagCreate) -> Flag:
        """Record a viewer's report against a video.

        Raises:
            ValidationFailedError: If the reporter already has a pending flag on
                this video.
        """
        existing = (
            db.query(Flag)
            .filter(
                Flag.reporter_id == reporter.id,
                Flag.video_id == video.id,
                Flag.status == FlagStatus.PENDING,
            )
            .first()
        )
        if existing is not None:
            raise ValidationFailedError("You have already flagged this video")

        flag = Flag(
            reporter_id=reporter.id,
            video_id=video.id,
            reason=data.reason,
            comment=data.comment,
        )
        db.add(flag)
        try:
            db.commit()
        except IntegrityError as err:
            db.rollback()
            raise ValidationFailedError("You have already flagged this video") from err
        db.refresh(flag)
        logger.info("User %s flagged video %s for %s", reporter.id, video.id, data.reason.value)
        return flag

    @staticmethod
    def get_flag(db: Session, flag_id: int) -> Flag:
        flag = db.get(Flag, flag_id)
        if flag is None:
            raise NotFoundError("Flag not found")
        return flag

    @staticmethod
    def resolve_flag(db: Session, admin: User, flag: Flag, ruling: FlagDecision) -> Flag:
        """Apply an admin decision to a pending flag.

        ``dismiss`` rejects the flag; every other decision resolves it, acts on
        the video, notifies its owner and raises the reporter's trust score.

        Raises:
            ValidationFailedError: If the flag was already decided.
        """
        if flag.status != FlagStatus.PENDING:
            raise ValidationFailedError("Flag has already been resolved")

        video = flag.video
        owner_id = video.channel.owner_id
        outcome = _FLAG_OUTCOMES[ruling.decision]
        new_status = FlagStatus.REJECTED if ruling.decision == "dismiss" else FlagStatus.RESOLVED
        old_status = flag.status

        with atomic(db):
            if ruling.decision == "warn":
                notify(
                    db,
                    owner_id,
                    "Content Warning",
                    "Your content has received a warning for violating community guidelines.",
                    video_id=video.id,
                )
            elif ruling.decision == "age_restrict":
                video.age_restricted = True
                notify(
                    db,
                    owner_id,
                    "Video Age-Restricted",
                    "Your video has been age-restricted due to its content.",
                    video_id=video.id,
                )
            elif ruling.decision == "remove":
                video.visibility = Visibility.PRIVATE
                notify(
                    db,
                    owner_id,
                    "Video Removed",
                    "Your video has been removed for violating community guidelines.",
                    video_id=video.id,
                )
            elif ruling.decision == "remove_with_strike":
                video.visibility = Visibility.PRIVATE
                ModerationService.issue_strike(
                    db,
                    admin,
                    video,
                    strike_type=ruling.strike_type or StrikeType.COMMUNITY_GUIDELINES,
                    severity=ruling.strike_severity or StrikeSeverity.STRIKE,
                    reason=ruling.notes or f"Content removed due to {flag.reason.value}",
                )

            if ruling.decision != "dismiss":
                reporter = flag.reporter
                reporter.trust_score = min(
                    100, reporter.trust_score + settings.reporter_trust_bonus
                )

            flag.status = new_status
            flag.decision = outcome
            flag.notes = ruling.notes
            flag.reviewed_by = admin.id
            flag.reviewed_at = utcnow()

            record_audit(
                db,
                admin,
                "FLAG_DISMISSED" if new_status == FlagStatus.REJECTED else "FLAG_RESOLVED",
                "Flag",
                flag.id,
                old_value={"status": old_status.value},
                new_value={"status": new_status.value, "decision": outcome},
                notes=ruling.notes,
            )
        db.refresh(flag)
        return flag

    # --- Strikes -------------------------------------------------------------------
    @staticmethod
    def issue_strike(
        db: Session,
        admin: User,
        video: Video,
        *,
        strike_type: StrikeType,
        severity: StrikeSeverity,
        reason: str,
    ) -> Strike:
        """Add a strike against ``video``'s owner and escalate the channel.

        Copyright strikes terminate the channel at the threshold; other
        STRIKE-severity strikes suspend it. Runs inside the caller's
        transaction.
        """
        channel = video.channel
        strike = _add_strike(
            db,
            admin,
            user_id=channel.owner_id,
            channel=channel,
            video_id=video.id,
            strike_type=strike_type,
            severity=severity,
            reason=reason,
            expires_in_days=settings.strike_expiry_days,
        )
        count = _escalate(db, strike, channel)
        notify(
            db,
            channel.owner_id,
            "Strike Issued",
            f"You have received a {strike_type.value.replace('_', ' ').lower()} strike. "
            f"You now have {count} active strike(s).",
            video_id=video.id,
        )
        return strike

    @staticmethod
    def create_strike(db: Session, admin: User, data: StrikeCreate) -> Strike:
        """Issue a strike directly against an account.

        Raises:
            NotFoundError: If the user, channel or video does not exist.
        """
        if db.get(User, data.user_id) is None:
            raise NotFoundError("User not found")
        channel = None
        if data.channel_id is not None:
            channel = db.get(Channel, data.channel_id)
            if channel is None:
                raise NotFoundError("Channel not found")
        if data.video_id is not None and db.get(Video, data.video_id) is None:
            raise NotFoundError("Video not found")

        with atomic(db):
            strike = _add_strike(
                db,
                admin,
                user_id=data.user_id,
                channel=channel,
                video_id=data.video_id,
                strike_type=data.type,
                severity=data.severity,
                reason=data.reason,
                expires_in_days=data.expires_in_days,
            )
            notify(
                db,
                data.user_id,
                "Warning Issued" if data.severity == StrikeSeverity.WARNING else "Strike Issued",
                data.reason,
                video_id=data.video_id,
                channel_id=data.channel_id,
            )
            _escalate(db, strike, channel)
            record_audit(
                db,
                admin,
                "STRIKE_ISSUED",
                "Strike",
                strike.id,
                new_value={
                    "type": data.type.value,
                    "severity": data.severity.value,
                    "reason": data.reason,
                },
            )
        db.refresh(strike)
        return strike

    @staticmethod
    def get_strike(db: Session, strike_id: int) -> Strike:
        strike = db.get(Strike, strike_id)
        if strike is None:
            raise NotFoundError("Strike not found")
        return strike

    @staticmethod
    def update_strike(db: Session, admin: User, strike: Strike, data: StrikeUpdate) -> Strike:
        """Remove, expire or re-grade a strike.

        Every action re-checks the owner's standing: dropping under the
        threshold lifts a strike-caused suspension, and re-grading a strike
        up to STRIKE can suspend the channel. Terminated channels stay
        terminated.

        Raises:
            ValidationFailedError: If ``update_severity`` is sent without a severity.
        """
        if data.action == "update_severity" and data.severity is None:
            raise ValidationFailedError("Severity is required")

        before = {"active": strike.active, "severity": strike.severity.value}
        channel = strike.channel
        with atomic(db):
            if data.action == "remove":
                strike.active = False
                notify(
                    db,
                    strike.user_id,
                    "Strike Removed",
                    "A strike on your account has been removed.",
                    channel_id=strike.channel_id,
                )
            elif data.action == "expire":
                strike.active = False
                strike.expires_at = utcnow()
            else:
                strike.severity = data.severity
                db.flush()
                _escalate(db, strike, channel)
            _lift_strike_suspension(db, strike.user_id, channel)

            record_audit(
                db,
                admin,
                _STRIKE_AUDIT_ACTIONS[data.action],
                "Strike",
                strike.id,
                old_value=before,
                new_value={"active": strike.active, "severity": strike.severity.value},
                notes=data.notes,
            )
        db.refresh(strike)
        return strike

    @staticmethod
    def delete_strike(db: Session, admin: User, strike: Strike) -> None:
        user_id, channel = strike.user_id, strike.channel
        with atomic(db):
            record_audit(
                db,
                admin,
                "STRIKE_DELETED",
                "Strike",
                strike.id,
                old_value={"type": strike.type.value, "severity": strike.severity.value},
                notes="Strike permanently deleted",
            )
            db.delete(strike)
            _lift_strike_suspension(db, user_id, channel)

    @staticmethod
    def lift_lapsed_suspensions(db: Session) -> int:
        """Restore every strike-suspended channel whose owner is back under the threshold."""
        channels = (
            db.query(Channel)
            .filter(
                Channel.status == ChannelStatus.SUSPENDED,
                Channel.suspended_by_strikes.is_(True),
            )
            .all()
        )
        with atomic(db):
            restored = sum(
                _lift_strike_suspension(db, channel.owner_id, channel) for channel in channels
            )
        return restored

    @staticmethod
    def strikes(
        db: Session,
        *,
        user_id: int | None = None,
        channel_id: int | None = None,
        strike_type: StrikeType | None = None,
        severity: StrikeSeverity | None = None,
        active: bool | None = None,
    ) -> Query:
        """Query strikes with optional filters."""
        query = db.query(Strike)
        if user_id is not None:
            query = query.filter(Strike.user_id == user_id)
        if channel_id is not None:
            query = query.filter(Strike.channel_id == channel_id)
        if strike_type is not None:
            query = query.filter(Strike.type == strike_type)
        if severity is not None:
            query = query.filter(Strike.severity == severity)
        if active is not None:
            query = query.filter(Strike.active.is_(active))
        return query

    # --- Copyright claims ----------------------------------------------------------
    @staticmethod
    def file_claim(db: Session, claimant: User, video: Video, data: ClaimCreate) -> CopyrightClaim:
        """Open a rights claim against someone else's video."""
        if video.channel.owner_id == claimant.id:
            raise ValidationFailedError("You cannot claim your own video")
        claim = CopyrightClaim(
            video_id=video.id,
            claimant_id=claimant.id,
            claim_type=data.claim_type,
            description=data.description,
        )
        db.add(claim)
        db.commit()
        db.refresh(claim)
        logger.info("User %s filed claim %s on video %s", claimant.id, claim.id, video.id)
        return claim

    @staticmethod
    def get_claim(db: Session, claim_id: int) -> CopyrightClaim:
        claim = db.get(CopyrightClaim, claim_id)
        if claim is None:
            raise NotFoundError("Claim not found")
        return claim

    @staticmethod
    def claims_against(db: Session, owner_id: int) -> Query:
        """Query claims filed against videos on channels ``owner_id`` owns."""
        return (
            db.query(CopyrightClaim)
            .join(Video, CopyrightClaim.video_id == Video.id)
            .join(Channel, Video.channel_id == Channel.id)
            .filter(Channel.owner_id == owner_id)
            .order_by(CopyrightClaim.created_at.desc(), CopyrightClaim.id.desc())
        )

    @staticmethod
    def counter_notice(
        db: Session,
        owner: User,
        claim: CopyrightClaim,
        statement: str,
    ) -> CopyrightClaim:
        """Let the video owner dispute a pending or upheld claim.

        Raises:
            PermissionDeniedError: If the caller does not own the claimed video.
            ValidationFailedError: If the claim is not in a disputable state.
        """
        if claim.video.channel.owner_id != owner.id:
            raise PermissionDeniedError("You don't have permission to dispute this claim")
        if claim.status not in _DISPUTABLE_CLAIM_STATES:
            raise ValidationFailedError("This claim cannot be disputed")
        claim.counter_notice = statement
        claim.counter_noticed_at = utcnow()
        claim.status = ClaimStatus.COUNTER_NOTICED
        db.commit()
        db.refresh(claim)
        return claim

    @staticmethod
    def decide_claim(
        db: Session,
        admin: User,
        claim: CopyrightClaim,
        ruling: ClaimDecision,
    ) -> CopyrightClaim:
        """Uphold, partially uphold or reject a claim.

        Raises:
            ValidationFailedError: If the claim was already decided.
        """
        if claim.status not in _DECIDABLE_CLAIM_STATES:
            raise ValidationFailedError("Claim has already been decided")

        video = claim.video
        owner_id = video.channel.owner_id
        new_status, outcome = _CLAIM_OUTCOMES[ruling.decision]
        old_status = claim.status

        with atomic(db):
            if ruling.decision == "reject":
                if video.visibility == Visibility.PRIVATE:
                    video.visibility = Visibility.PUBLIC
                notify(
                    db,
                    owner_id,
                    "Copyright Claim Rejected",
                    f'The copyright claim on your video "{video.title}" has been rejected. '
                    "No action will be taken.",
                    video_id=video.id,
                )
            else:
                if ruling.action == "block":
                    video.visibility = Visibility.PRIVATE
                verb = "upheld" if ruling.decision == "uphold" else "partially upheld"
                notify(
                    db,
                    owner_id,
                    f"Copyright Claim {verb.title()}",
                    f'The copyright claim on your video "{video.title}" has been {verb}.',
                    video_id=video.id,
                )
                if ruling.apply_strike:
                    ModerationService.issue_strike(
                        db,
                        admin,
                        video,
                        strike_type=StrikeType.COPYRIGHT,
                        severity=StrikeSeverity.STRIKE,
                        reason=ruling.notes or "Copyright violation - claim upheld",
                    )

            claim.status = new_status
            claim.decision = outcome
            claim.decided_by = admin.id
            claim.decided_at = utcnow()

            record_audit(
                db,
                admin,
                "COPYRIGHT_CLAIM_UPHELD"
                if new_status == ClaimStatus.UPHELD
                else "COPYRIGHT_CLAIM_REJECTED",
                "CopyrightClaim",
                claim.id,
                old_value={"status": old_status.value},
                new_value={"status": new_status.value, "decision": outcome},
                notes=ruling.notes,
            )
        db.refresh(claim)
        return claim
