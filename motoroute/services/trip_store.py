"""
Trip Store - persistence capability consumed by the lifecycle services

The services depend only on the TripStore interface. SqlAlchemyTripStore is
used by the HTTP application; InMemoryTripStore backs tests and local tools.
Status changes go through update_trip_status, a conditional write that only
succeeds while the stored status still equals the status the caller read.
"""
import asyncio
import copy
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from motoroute.core.exceptions import (
    ConcurrentModificationError,
    TripNotFoundError,
    UnexpectedFailureError,
)
from motoroute.models.internal_models import (
    GpxAttachment,
    MediaItem,
    StageSnapshot,
    TripSnapshot,
)
from motoroute.models.trip import Stage, Trip, TripStatus

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_durable(media: List[MediaItem]) -> List[MediaItem]:
    """Swap client-generated temporary media ids for permanent ones"""
    return [
        replace(item, id=uuid.uuid4().hex) if item.is_temporary or not item.id else item
        for item in media
    ]


class TripStore(ABC):
    """Storage capability for trips"""

    @abstractmethod
    async def find_trip_by_id(self, trip_id: int) -> Optional[TripSnapshot]:
        """Return a snapshot of the trip or None"""

    @abstractmethod
    async def update_trip_status(
        self, trip_id: int, new_status: TripStatus, expected_prior_status: TripStatus
    ) -> TripSnapshot:
        """
        Atomically set the status if the stored status equals ``expected_prior_status``.

        Raises:
            TripNotFoundError: the trip no longer exists
            ConcurrentModificationError: the stored status has moved
        """

    @abstractmethod
    async def add_trip(self, draft: TripSnapshot) -> TripSnapshot:
        """Persist a new trip, assigning its id and durable media ids"""

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Whether a trip already uses ``slug``"""


class InMemoryTripStore(TripStore):
    """Dictionary-backed store; snapshots handed out are copies"""

    def __init__(self):
        self._trips: Dict[int, TripSnapshot] = {}
        self._next_id = 1
        self._next_stage_id = 1
        self._lock = asyncio.Lock()

    async def find_trip_by_id(self, trip_id: int) -> Optional[TripSnapshot]:
        trip = self._trips.get(trip_id)
        return copy.deepcopy(trip) if trip is not None else None

    async def update_trip_status(
        self, trip_id: int, new_status: TripStatus, expected_prior_status: TripStatus
    ) -> TripSnapshot:
        async with self._lock:
            current = self._trips.get(trip_id)
            if current is None:
                raise TripNotFoundError(trip_id)
            if current.status != expected_prior_status:
                raise ConcurrentModificationError(
                    trip_id, TripStatus(expected_prior_status).value, current.status.value
                )
            updated = current.with_status(TripStatus(new_status), utcnow())
            self._trips[trip_id] = updated
            return copy.deepcopy(updated)

    async def add_trip(self, draft: TripSnapshot) -> TripSnapshot:
        async with self._lock:
            now = utcnow()
            stages = []
            for stage in draft.stages:
                stages.append(replace(stage, id=self._next_stage_id, media=make_durable(stage.media)))
                self._next_stage_id += 1
            trip = replace(
                draft,
                id=self._next_id,
                media=make_durable(draft.media),
                stages=stages,
                created_at=now,
                updated_at=now,
            )
            self._trips[trip.id] = trip
            self._next_id += 1
            return copy.deepcopy(trip)

    async def slug_exists(self, slug: str) -> bool:
        return any(trip.slug == slug for trip in self._trips.values())


def _media_from_json(raw) -> List[MediaItem]:
    return [MediaItem.from_dict(item) for item in (raw or [])]


def _to_snapshot(row: Trip) -> TripSnapshot:
    return TripSnapshot(
        id=row.id,
        slug=row.slug,
        user_id=row.user_id,
        title=row.title,
        summary=row.summary,
        destination=row.destination,
        theme=row.theme,
        duration_days=row.duration_days,
        duration_nights=row.duration_nights,
        status=TripStatus(row.status),
        stages=[
            StageSnapshot(
                id=stage.id,
                order_index=stage.order_index,
                title=stage.title,
                description=stage.description,
                route_type=stage.route_type,
                media=_media_from_json(stage.media),
                gpx_file=GpxAttachment.from_dict(stage.gpx_file),
            )
            for stage in sorted(row.stages, key=lambda s: s.order_index)
        ],
        media=_media_from_json(row.media),
        gpx_file=GpxAttachment.from_dict(row.gpx_file),
        travel_date=row.travel_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyTripStore(TripStore):
    """Store backed by an AsyncSession; one instance per request"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, trip_id: int) -> Optional[Trip]:
        stmt = (
            select(Trip)
            .options(selectinload(Trip.stages))
            .where(Trip.id == trip_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_trip_by_id(self, trip_id: int) -> Optional[TripSnapshot]:
        try:
            row = await self._load(trip_id)
        except SQLAlchemyError as e:
            raise UnexpectedFailureError("find_trip_by_id", e) from e
        return _to_snapshot(row) if row is not None else None

    async def update_trip_status(
        self, trip_id: int, new_status: TripStatus, expected_prior_status: TripStatus
    ) -> TripSnapshot:
        stmt = (
            update(Trip)
            .where(Trip.id == trip_id, Trip.status == TripStatus(expected_prior_status))
            .values(status=TripStatus(new_status), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount != 1:
                await self.db.rollback()
                row = await self._load(trip_id)
                if row is None:
                    raise TripNotFoundError(trip_id)
                raise ConcurrentModificationError(
                    trip_id, TripStatus(expected_prior_status).value, TripStatus(row.status).value
                )
            await self.db.commit()
            row = await self._load(trip_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise UnexpectedFailureError("update_trip_status", e) from e
        return _to_snapshot(row)

    async def add_trip(self, draft: TripSnapshot) -> TripSnapshot:
        row = Trip(
            slug=draft.slug,
            user_id=draft.user_id,
            title=draft.title,
            summary=draft.summary,
            destination=draft.destination,
            theme=draft.theme,
            duration_days=draft.duration_days,
            duration_nights=draft.duration_nights,
            travel_date=draft.travel_date,
            status=draft.status,
            media=[item.to_dict() for item in make_durable(draft.media)],
            gpx_file=draft.gpx_file.to_dict() if draft.gpx_file else None,
            stages=[
                Stage(
                    order_index=stage.order_index,
                    title=stage.title,
                    description=stage.description,
                    route_type=stage.route_type,
                    media=[item.to_dict() for item in make_durable(stage.media)],
                    gpx_file=stage.gpx_file.to_dict() if stage.gpx_file else None,
                )
                for stage in draft.stages
            ],
        )
        try:
            self.db.add(row)
            await self.db.commit()
            row = await self._load(row.id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise UnexpectedFailureError("add_trip", e) from e
        return _to_snapshot(row)

    async def slug_exists(self, slug: str) -> bool:
        try:
            result = await self.db.execute(select(Trip.id).where(Trip.slug == slug).limit(1))
        except SQLAlchemyError as e:
            raise UnexpectedFailureError("slug_exists", e) from e
        return result.scalar_one_or_none() is not None
