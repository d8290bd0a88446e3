"""
Trip Service - draft creation and access-checked reads
"""
import logging
from typing import Optional

from slugify import slugify

from motoroute.core.exceptions import PermissionDeniedError
from motoroute.models.internal_models import (
    Actor,
    GpxAttachment,
    MediaItem,
    StageSnapshot,
    TripSnapshot,
)
from motoroute.models.trip import TripStatus
from motoroute.schemas.trip import TripCreate
from motoroute.services.access_control import AccessReason, authorize_view, ensure_allowed
from motoroute.services.ownership import OwnershipResolver
from motoroute.services.role_policy import can_create_trips
from motoroute.services.trip_store import TripStore

logger = logging.getLogger(__name__)


class TripService:
    """Creates draft trips and serves them to authorized readers"""

    def __init__(self, store: TripStore):
        self.store = store
        self.ownership = OwnershipResolver(store)

    async def create_draft(self, actor: Actor, trip_data: TripCreate) -> TripSnapshot:
        """
        Create a new trip in draft status owned by ``actor``

        Args:
            actor: Authenticated author
            trip_data: Trip creation data

        Returns:
            Created trip

        Raises:
            PermissionDeniedError: the actor's role cannot author trips
        """
        if not can_create_trips(actor.role):
            raise PermissionDeniedError(
                reason=AccessReason.ROLE_CANNOT_AUTHOR.value,
                message="Only Rangers and Sentinels can create trips",
            )

        stages = [
            StageSnapshot(
                order_index=stage.order_index if stage.order_index is not None else position,
                title=stage.title,
                description=stage.description,
                route_type=stage.route_type,
                media=[MediaItem(**item.model_dump()) for item in stage.media],
                gpx_file=GpxAttachment(**stage.gpx_file.model_dump()) if stage.gpx_file else None,
            )
            for position, stage in enumerate(trip_data.stages)
        ]

        draft = TripSnapshot(
            user_id=actor.id,
            slug=await self._unique_slug(trip_data.title),
            title=trip_data.title,
            summary=trip_data.summary,
            destination=trip_data.destination,
            theme=trip_data.theme,
            duration_days=trip_data.duration_days or max(1, len(stages)),
            duration_nights=trip_data.duration_nights,
            status=TripStatus.DRAFT,
            stages=sorted(stages, key=lambda s: s.order_index),
            media=[MediaItem(**item.model_dump()) for item in trip_data.media],
            gpx_file=GpxAttachment(**trip_data.gpx_file.model_dump()) if trip_data.gpx_file else None,
            travel_date=trip_data.travel_date,
        )

        trip = await self.store.add_trip(draft)
        logger.info(
            f"Draft trip {trip.id} created",
            extra={"trip_id": trip.id, "actor_id": actor.id, "stage_count": len(trip.stages)},
        )
        return trip

    async def get_trip(self, actor: Optional[Actor], trip_id: int) -> TripSnapshot:
        """
        Get a trip the actor is allowed to see

        Raises:
            TripNotFoundError, AuthenticationRequiredError, PermissionDeniedError
        """
        resolved = await self.ownership.resolve(actor, trip_id)
        ensure_allowed(authorize_view(actor, resolved.trip))
        return resolved.trip

    async def _unique_slug(self, title: str) -> str:
        base = slugify(title, max_length=100) or "trip"
        slug = base
        suffix = 2
        while await self.store.slug_exists(slug):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug
