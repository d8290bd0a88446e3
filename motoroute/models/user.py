from sqlalchemy.orm import relationship
from sqlalchemy import Column, String, Integer, DateTime, Enum as SQLEnum, func
import enum

from motoroute.core.db import Base


class UserRole(str, enum.Enum):
    """Platform roles, lowest to highest capability"""
    EXPLORER = "Explorer"
    RANGER = "Ranger"
    SENTINEL = "Sentinel"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    role = Column(
        SQLEnum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=16,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        default=UserRole.EXPLORER,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    trips = relationship("Trip", back_populates="user")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} email={self.email} role={self.role}>"
