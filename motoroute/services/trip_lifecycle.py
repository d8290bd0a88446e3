"""
Trip Lifecycle Service - the only path by which a trip's status changes
"""
import logging
from typing import Optional

from motoroute.core.exceptions import (
    ConcurrentModificationError,
    InvalidTransitionError,
    ValidationFailedError,
)
from motoroute.models.internal_models import Actor, TripSnapshot
from motoroute.models.trip import TripStatus
from motoroute.services.access_control import (
    authorize,
    authorize_validation_preview,
    ensure_allowed,
)
from motoroute.services.ownership import OwnershipResolver
from motoroute.services.transitions import get_transition
from motoroute.services.trip_store import TripStore
from motoroute.services.trip_validation import TripValidator, ValidationReport

logger = logging.getLogger(__name__)


class TripLifecycleService:
    """Applies the transition table, access gate and publication checks"""

    def __init__(self, store: TripStore, validator: Optional[TripValidator] = None):
        self.store = store
        self.ownership = OwnershipResolver(store)
        self.validator = validator or TripValidator()

    async def request_transition(
        self,
        actor: Optional[Actor],
        trip_id: int,
        target_status: TripStatus,
        expected_status: Optional[TripStatus] = None,
    ) -> TripSnapshot:
        """
        Move a trip to ``target_status``.

        Args:
            actor: Caller, None when unauthenticated
            trip_id: Trip ID
            target_status: Requested status
            expected_status: Status the caller last saw, if it wants the
                request to fail when the trip has moved since

        Returns:
            The updated trip

        Raises:
            TripNotFoundError, AuthenticationRequiredError, PermissionDeniedError,
            ConcurrentModificationError, InvalidTransitionError,
            ValidationFailedError, UnexpectedFailureError
        """
        target_status = TripStatus(target_status)
        resolved = await self.ownership.resolve(actor, trip_id)
        trip = resolved.trip

        ensure_allowed(authorize(actor, trip, target_status, is_owner=resolved.is_owner))

        if expected_status is not None and TripStatus(expected_status) != trip.status:
            raise ConcurrentModificationError(
                trip_id, TripStatus(expected_status).value, trip.status.value
            )

        transition = get_transition(trip.status, target_status)
        if transition is None:
            raise InvalidTransitionError(trip.status.value, target_status.value)

        if transition.requires_validation:
            report = self.validator.validate_for_publication(trip)
            if not report.is_valid:
                raise ValidationFailedError(report.issues_as_dicts())

        updated = await self.store.update_trip_status(trip_id, target_status, trip.status)

        logger.info(
            f"Trip {trip_id} moved from {trip.status.value} to {target_status.value}",
            extra={
                "trip_id": trip_id,
                "actor_id": actor.id,
                "from_status": trip.status.value,
                "to_status": target_status.value,
            },
        )
        return updated

    async def publish(
        self, actor: Optional[Actor], trip_id: int, expected_status: Optional[TripStatus] = None
    ) -> TripSnapshot:
        return await self.request_transition(actor, trip_id, TripStatus.PUBLISHED, expected_status)

    async def check_publication(self, actor: Optional[Actor], trip_id: int) -> ValidationReport:
        """
        Run the publication checks without changing anything.

        Raises:
            TripNotFoundError, AuthenticationRequiredError, PermissionDeniedError
        """
        resolved = await self.ownership.resolve(actor, trip_id)
        ensure_allowed(authorize_validation_preview(actor, resolved.trip))
        return self.validator.validate_for_publication(resolved.trip)
