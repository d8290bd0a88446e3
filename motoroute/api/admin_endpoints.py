"""
Admin API endpoints - Sentinel moderation of trips
"""
from fastapi import APIRouter, Depends

from motoroute.core.dependencies import get_lifecycle_service, require_actor
from motoroute.core.exceptions import PermissionDeniedError
from motoroute.models.internal_models import Actor
from motoroute.models.trip import TripStatus
from motoroute.schemas.base import Envelope
from motoroute.schemas.trip import TripRead
from motoroute.services.role_policy import can_access_admin_panel
from motoroute.services.trip_lifecycle import TripLifecycleService

router = APIRouter(prefix="/admin", tags=["admin"])


async def require_admin(actor: Actor = Depends(require_actor)) -> Actor:
    if not can_access_admin_panel(actor.role):
        raise PermissionDeniedError(reason="admin_panel_required")
    return actor


@router.patch("/trips/{trip_id}/approve", response_model=Envelope[TripRead])
async def approve_trip(
    trip_id: int,
    lifecycle: TripLifecycleService = Depends(get_lifecycle_service),
    actor: Actor = Depends(require_admin),
):
    """
    Approve a trip awaiting review (or a draft) and publish it.

    The publication checks still apply.
    """
    trip = await lifecycle.request_transition(actor, trip_id, TripStatus.PUBLISHED)

    return Envelope(status="ok", data=TripRead.from_snapshot(trip))
