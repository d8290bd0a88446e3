"""
Access Control Gate - decides who may move a trip between statuses

Two inputs drive every decision: what the actor's role is allowed to do, and
whether the actor authored the trip. The result always carries the rule that
decided it so a denial can be logged and reported precisely.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from motoroute.core.exceptions import AuthenticationRequiredError, PermissionDeniedError
from motoroute.models.internal_models import Actor, TripSnapshot
from motoroute.models.trip import TripStatus
from motoroute.models.user import UserRole
from motoroute.services.ownership import is_trip_owner
from motoroute.services.role_policy import can_create_trips
from motoroute.services.transitions import Transition, get_transition

logger = logging.getLogger(__name__)


class AccessReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    SENTINEL_OVERRIDE = "sentinel_override"
    OWNER = "owner"
    PUBLISHED = "published"
    ROLE_CANNOT_AUTHOR = "role_cannot_author"
    NOT_OWNER = "not_owner"
    TRANSITION_NOT_SELF_SERVICE = "transition_not_self_service"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: AccessReason

    def __bool__(self) -> bool:
        return self.allowed


def decide(
    role: Optional[UserRole],
    is_owner: bool,
    transition: Optional[Transition] = None,
) -> AccessDecision:
    """
    Core rule on the two axes: role capability and ownership.

    ``transition`` is None when the requested edge is not in the table; the
    lifecycle reports that as an invalid transition, so it is not denied here.
    """
    if role is None:
        return AccessDecision(False, AccessReason.UNAUTHENTICATED)
    if role == UserRole.SENTINEL:
        return AccessDecision(True, AccessReason.SENTINEL_OVERRIDE)
    if not can_create_trips(role):
        return AccessDecision(False, AccessReason.ROLE_CANNOT_AUTHOR)
    if not is_owner:
        return AccessDecision(False, AccessReason.NOT_OWNER)
    if transition is not None and not transition.owner_self_service:
        return AccessDecision(False, AccessReason.TRANSITION_NOT_SELF_SERVICE)
    return AccessDecision(True, AccessReason.OWNER)


def authorize(
    actor: Optional[Actor],
    trip: TripSnapshot,
    target_status: TripStatus,
    is_owner: Optional[bool] = None,
) -> AccessDecision:
    """Decide whether ``actor`` may request ``trip -> target_status``"""
    if is_owner is None:
        is_owner = is_trip_owner(actor, trip)
    decision = decide(
        actor.role if actor is not None else None,
        is_owner,
        get_transition(trip.status, target_status),
    )
    if not decision.allowed:
        logger.info(
            f"Transition of trip {trip.id} to {TripStatus(target_status).value} denied: {decision.reason.value}",
            extra={
                "trip_id": trip.id,
                "actor_id": actor.id if actor else None,
                "reason": decision.reason.value,
            },
        )
    return decision


def authorize_view(actor: Optional[Actor], trip: TripSnapshot) -> AccessDecision:
    """Published trips are visible to any signed-in user; anything else to owner or Sentinel"""
    if actor is None:
        return AccessDecision(False, AccessReason.UNAUTHENTICATED)
    if actor.role == UserRole.SENTINEL:
        return AccessDecision(True, AccessReason.SENTINEL_OVERRIDE)
    if is_trip_owner(actor, trip):
        return AccessDecision(True, AccessReason.OWNER)
    if trip.status == TripStatus.PUBLISHED:
        return AccessDecision(True, AccessReason.PUBLISHED)
    return AccessDecision(False, AccessReason.NOT_OWNER)


def authorize_validation_preview(actor: Optional[Actor], trip: TripSnapshot) -> AccessDecision:
    """Only the author or a Sentinel may see a trip's publication report"""
    if actor is None:
        return AccessDecision(False, AccessReason.UNAUTHENTICATED)
    if actor.role == UserRole.SENTINEL:
        return AccessDecision(True, AccessReason.SENTINEL_OVERRIDE)
    if is_trip_owner(actor, trip):
        return AccessDecision(True, AccessReason.OWNER)
    return AccessDecision(False, AccessReason.NOT_OWNER)


def ensure_allowed(decision: AccessDecision) -> None:
    """
    Raises:
        AuthenticationRequiredError: no actor
        PermissionDeniedError: any other denial, carrying the reason
    """
    if decision.allowed:
        return
    if decision.reason == AccessReason.UNAUTHENTICATED:
        raise AuthenticationRequiredError()
    raise PermissionDeniedError(reason=decision.reason.value)
