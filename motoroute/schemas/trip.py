"""
Trip schemas for API requests/responses
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Literal, Optional

from motoroute.models.internal_models import StageSnapshot, TripSnapshot
from motoroute.models.trip import TripStatus
from motoroute.services.transitions import allowed_transitions


class MediaItemIn(BaseModel):
    """Media reference; ids starting with 'temp-' are replaced on save"""
    id: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=2048)
    type: Literal["image", "video"] = "image"
    caption: Optional[str] = None


class GpxFileIn(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., description="Raw GPX XML")


class StageCreate(BaseModel):
    """Schema for one stage of a new trip"""
    order_index: Optional[int] = Field(None, ge=0)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    route_type: Optional[str] = Field(None, max_length=100)
    media: List[MediaItemIn] = Field(default_factory=list)
    gpx_file: Optional[GpxFileIn] = None


class TripCreate(BaseModel):
    """Schema for creating a new draft trip"""
    title: str = Field(..., min_length=1, max_length=255)
    summary: Optional[str] = None
    destination: str = Field(..., min_length=1, max_length=255)
    theme: Optional[str] = Field(None, max_length=100)
    duration_days: Optional[int] = Field(None, ge=1)
    duration_nights: int = Field(0, ge=0)
    travel_date: Optional[datetime] = None
    stages: List[StageCreate] = Field(default_factory=list)
    media: List[MediaItemIn] = Field(default_factory=list)
    gpx_file: Optional[GpxFileIn] = None

    @field_validator("stages")
    @classmethod
    def validate_stage_order(cls, v):
        """Stage positions (explicit or implied by list order) must be distinct"""
        positions = [
            stage.order_index if stage.order_index is not None else position
            for position, stage in enumerate(v)
        ]
        duplicates = sorted({p for p in positions if positions.count(p) > 1})
        if duplicates:
            raise ValueError(f"Duplicate stage order_index: {duplicates}")
        return v


class MediaItemRead(BaseModel):
    id: str
    url: str
    type: str
    caption: Optional[str] = None

    class Config:
        from_attributes = True


class StageRead(BaseModel):
    id: Optional[int] = None
    order_index: int
    label: str
    title: str
    description: Optional[str] = None
    route_type: Optional[str] = None
    media: List[MediaItemRead] = []
    gpx_filename: Optional[str] = None

    @classmethod
    def from_snapshot(cls, stage: StageSnapshot) -> "StageRead":
        return cls(
            id=stage.id,
            order_index=stage.order_index,
            label=stage.label,
            title=stage.title,
            description=stage.description,
            route_type=stage.route_type,
            media=[MediaItemRead.model_validate(item) for item in stage.media],
            gpx_filename=stage.gpx_file.filename if stage.gpx_file else None,
        )


class TripRead(BaseModel):
    """Schema for trip read response"""
    id: int
    slug: str
    user_id: int
    title: str
    summary: Optional[str]
    destination: str
    theme: Optional[str]
    duration_days: int
    duration_nights: int
    status: TripStatus
    next_statuses: List[TripStatus] = []
    travel_date: Optional[datetime]
    stages: List[StageRead] = []
    media: List[MediaItemRead] = []
    gpx_filename: Optional[str] = None
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_snapshot(cls, trip: TripSnapshot) -> "TripRead":
        return cls(
            id=trip.id,
            slug=trip.slug,
            user_id=trip.user_id,
            title=trip.title,
            summary=trip.summary,
            destination=trip.destination,
            theme=trip.theme,
            duration_days=trip.duration_days,
            duration_nights=trip.duration_nights,
            status=trip.status,
            next_statuses=allowed_transitions(trip.status),
            travel_date=trip.travel_date,
            stages=[StageRead.from_snapshot(stage) for stage in trip.stages],
            media=[MediaItemRead.model_validate(item) for item in trip.media],
            gpx_filename=trip.gpx_file.filename if trip.gpx_file else None,
            created_at=trip.created_at,
            updated_at=trip.updated_at,
        )


class StatusChangeRequest(BaseModel):
    """Requested lifecycle move; expected_status guards against stale reads"""
    target_status: TripStatus
    expected_status: Optional[TripStatus] = None


class PublishRequest(BaseModel):
    expected_status: Optional[TripStatus] = None


class ValidationIssueRead(BaseModel):
    field: str
    code: str
    message: str

    class Config:
        from_attributes = True


class ValidationReportRead(BaseModel):
    """Publication readiness of a trip"""
    is_valid: bool
    validation_errors: List[ValidationIssueRead] = []
