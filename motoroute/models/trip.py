"""
Trip and Stage models for authored itineraries
"""
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum, Text, JSON, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from motoroute.core.db import Base

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class TripStatus(str, enum.Enum):
    """Trip lifecycle status, persisted as the literal token"""
    DRAFT = "Bozza"
    PENDING_REVIEW = "Pronto_per_revisione"
    PUBLISHED = "Pubblicato"
    ARCHIVED = "Archiviato"


class Trip(Base):
    """
    Trip is an authored multi-stage itinerary, the unit of publication
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=True)
    destination = Column(String(255), nullable=False)
    theme = Column(String(100), nullable=True)
    duration_days = Column(Integer, nullable=False, default=1)
    duration_nights = Column(Integer, nullable=False, default=0)
    travel_date = Column(DateTime(timezone=True), nullable=True)
    media = Column(JSONType, nullable=False, default=list)
    gpx_file = Column(JSONType, nullable=True)  # {"filename": ..., "content": <gpx xml>}
    status = Column(
        SQLEnum(
            TripStatus,
            name="trip_status",
            native_enum=False,
            length=32,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=TripStatus.DRAFT,
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="trips")
    stages = relationship(
        "Stage",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Stage.order_index",
    )


class Stage(Base):
    """
    One ordered leg of a trip itinerary
    """
    __tablename__ = "stages"
    __table_args__ = (UniqueConstraint("trip_id", "order_index", name="uq_stages_trip_order"),)

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    order_index = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    route_type = Column(String(100), nullable=True)
    media = Column(JSONType, nullable=False, default=list)
    gpx_file = Column(JSONType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    trip = relationship("Trip", back_populates="stages")
