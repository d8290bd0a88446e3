"""
Models package for the Motoroute backend.

ORM models describe the persisted layout; internal models are the immutable
snapshots the lifecycle services work on.
"""

from .user import User, UserRole
from .trip import Trip, Stage, TripStatus
from .internal_models import (
    TEMP_ID_PREFIX,
    Actor,
    MediaItem,
    GpxAttachment,
    StageSnapshot,
    TripSnapshot,
)

__all__ = [
    # ORM models
    "User",
    "UserRole",
    "Trip",
    "Stage",
    "TripStatus",

    # Internal models
    "TEMP_ID_PREFIX",
    "Actor",
    "MediaItem",
    "GpxAttachment",
    "StageSnapshot",
    "TripSnapshot",
]
