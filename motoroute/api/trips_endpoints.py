"""
Trip API endpoints - draft creation, publication checks and lifecycle moves
"""
from typing import Optional
from fastapi import APIRouter, Depends, status

from motoroute.core.dependencies import (
    get_lifecycle_service,
    get_trip_service,
    require_actor,
)
from motoroute.models.internal_models import Actor
from motoroute.schemas.base import Envelope
from motoroute.schemas.trip import (
    PublishRequest,
    StatusChangeRequest,
    TripCreate,
    TripRead,
    ValidationIssueRead,
    ValidationReportRead,
)
from motoroute.services.trip_lifecycle import TripLifecycleService
from motoroute.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=Envelope[TripRead], status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    service: TripService = Depends(get_trip_service),
    actor: Actor = Depends(require_actor),
):
    """
    Create a new draft trip

    - **title**, **destination**: required
    - **stages**: ordered itinerary legs, each optionally with a GPX track
    - **media**: media items; temporary ids (``temp-...``) are replaced on save
    """
    trip = await service.create_draft(actor, trip_data)

    return Envelope(status="ok", data=TripRead.from_snapshot(trip))


@router.get("/{trip_id}", response_model=Envelope[TripRead])
async def get_trip(
    trip_id: int,
    service: TripService = Depends(get_trip_service),
    actor: Actor = Depends(require_actor),
):
    """
    Get a trip. Published trips are visible to everyone signed in,
    other statuses only to the author and Sentinels.
    """
    trip = await service.get_trip(actor, trip_id)

    return Envelope(status="ok", data=TripRead.from_snapshot(trip))


@router.get("/{trip_id}/validate", response_model=Envelope[ValidationReportRead])
async def validate_trip(
    trip_id: int,
    lifecycle: TripLifecycleService = Depends(get_lifecycle_service),
    actor: Actor = Depends(require_actor),
):
    """
    Check whether a trip could be published right now, without publishing it

    Returns every failing check at once. Author or Sentinel only.
    """
    report = await lifecycle.check_publication(actor, trip_id)

    return Envelope(
        status="ok",
        data=ValidationReportRead(
            is_valid=report.is_valid,
            validation_errors=[ValidationIssueRead.model_validate(issue) for issue in report.errors],
        ),
    )


@router.patch("/{trip_id}/publish", response_model=Envelope[TripRead])
async def publish_trip(
    trip_id: int,
    body: Optional[PublishRequest] = None,
    lifecycle: TripLifecycleService = Depends(get_lifecycle_service),
    actor: Actor = Depends(require_actor),
):
    """
    Publish a draft or pending-review trip

    Responds 400 with ``details.validation_errors`` when the trip fails the
    publication checks.
    """
    expected = body.expected_status if body else None
    trip = await lifecycle.publish(actor, trip_id, expected_status=expected)

    return Envelope(status="ok", data=TripRead.from_snapshot(trip))


@router.patch("/{trip_id}/status", response_model=Envelope[TripRead])
async def change_trip_status(
    trip_id: int,
    change: StatusChangeRequest,
    lifecycle: TripLifecycleService = Depends(get_lifecycle_service),
    actor: Actor = Depends(require_actor),
):
    """
    Move a trip along its lifecycle (submit for review, publish, archive)

    - **target_status**: Pronto_per_revisione, Pubblicato or Archiviato
    - **expected_status**: optional; the request fails with 409 if the trip
      is no longer in this status
    """
    trip = await lifecycle.request_transition(
        actor, trip_id, change.target_status, expected_status=change.expected_status
    )

    return Envelope(status="ok", data=TripRead.from_snapshot(trip))
