"""
Internal data structures shared by the lifecycle, access and validation services.

Services never operate on ORM rows directly: the trip store hands out
immutable snapshots so a validation verdict or authorization decision is
always computed against a single consistent read.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from motoroute.models.trip import TripStatus
from motoroute.models.user import UserRole


TEMP_ID_PREFIX = "temp-"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request"""
    id: int
    role: UserRole


@dataclass(frozen=True)
class MediaItem:
    """Captioned media reference attached to a trip or stage"""
    id: str
    url: str
    type: str = "image"
    caption: Optional[str] = None

    @property
    def is_temporary(self) -> bool:
        return self.id.startswith(TEMP_ID_PREFIX)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "url": self.url, "caption": self.caption}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaItem":
        return cls(
            id=str(data.get("id", "")),
            url=data.get("url", ""),
            type=data.get("type", "image"),
            caption=data.get("caption"),
        )


@dataclass(frozen=True)
class GpxAttachment:
    """Raw GPX track as uploaded"""
    filename: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"filename": self.filename, "content": self.content}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["GpxAttachment"]:
        if not data:
            return None
        return cls(filename=data.get("filename", ""), content=data.get("content") or "")


@dataclass(frozen=True)
class StageSnapshot:
    order_index: int
    title: str
    description: Optional[str] = None
    route_type: Optional[str] = None
    media: List[MediaItem] = field(default_factory=list)
    gpx_file: Optional[GpxAttachment] = None
    id: Optional[int] = None

    @property
    def label(self) -> str:
        """Zero-padded, 1-based stage number ("01", "02", ...)"""
        return f"{self.order_index + 1:02d}"


@dataclass(frozen=True)
class TripSnapshot:
    """Point-in-time read of a trip and its itinerary"""
    user_id: int
    title: str
    destination: str
    slug: str = ""
    summary: Optional[str] = None
    theme: Optional[str] = None
    duration_days: int = 1
    duration_nights: int = 0
    status: TripStatus = TripStatus.DRAFT
    stages: List[StageSnapshot] = field(default_factory=list)
    media: List[MediaItem] = field(default_factory=list)
    gpx_file: Optional[GpxAttachment] = None
    travel_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None

    def with_status(self, status: TripStatus, updated_at: datetime) -> "TripSnapshot":
        return replace(self, status=status, updated_at=updated_at)
