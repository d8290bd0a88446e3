"""
Ownership Resolver - answers "did this actor author this trip?"
"""
from dataclasses import dataclass
from typing import Optional

from motoroute.core.exceptions import TripNotFoundError
from motoroute.models.internal_models import Actor, TripSnapshot
from motoroute.services.trip_store import TripStore


def is_trip_owner(actor: Optional[Actor], trip: TripSnapshot) -> bool:
    return actor is not None and actor.id == trip.user_id


@dataclass(frozen=True)
class ResolvedTrip:
    trip: TripSnapshot
    is_owner: bool


class OwnershipResolver:
    """Looks a trip up through the store and pairs it with the ownership fact"""

    def __init__(self, store: TripStore):
        self.store = store

    async def resolve(self, actor: Optional[Actor], trip_id: int) -> ResolvedTrip:
        """
        Raises:
            TripNotFoundError: no trip with ``trip_id``
        """
        trip = await self.store.find_trip_by_id(trip_id)
        if trip is None:
            raise TripNotFoundError(trip_id)
        return ResolvedTrip(trip=trip, is_owner=is_trip_owner(actor, trip))
