"""
Dependency providers for FastAPI.

The trip store is provided per request and can be swapped through
``app.dependency_overrides[get_trip_store]`` (tests inject the in-memory store).
"""

from fastapi import Depends, Request
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from motoroute.core.db import get_db
from motoroute.core.exceptions import AuthenticationRequiredError
from motoroute.core.security import verify_token
from motoroute.models.internal_models import Actor
from motoroute.models.user import UserRole
from motoroute.services.trip_lifecycle import TripLifecycleService
from motoroute.services.trip_service import TripService
from motoroute.services.trip_store import SqlAlchemyTripStore, TripStore
from motoroute.services.trip_validation import TripValidator


logger = logging.getLogger(__name__)


def get_request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


async def get_current_actor(request: Request) -> Optional[Actor]:
    """
    Resolve the caller from the Bearer session token.

    Returns None for missing, expired or malformed tokens; whether that is
    acceptable is decided by the endpoint and the access gate.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    payload = verify_token(auth_header[len("Bearer "):])
    if not payload or "sub" not in payload:
        logger.info(
            "Rejected session token",
            extra={'request_id': get_request_id(request)}
        )
        return None

    try:
        return Actor(id=int(payload["sub"]), role=UserRole(payload.get("role")))
    except (TypeError, ValueError):
        logger.warning(
            "Session token carries an invalid subject or role",
            extra={'request_id': get_request_id(request)}
        )
        return None


async def require_actor(actor: Optional[Actor] = Depends(get_current_actor)) -> Actor:
    """
    Raises:
        AuthenticationRequiredError: no valid session
    """
    if actor is None:
        raise AuthenticationRequiredError()
    return actor


async def get_trip_store(db: AsyncSession = Depends(get_db)) -> TripStore:
    return SqlAlchemyTripStore(db)


def get_trip_validator() -> TripValidator:
    return TripValidator()


def get_lifecycle_service(
    store: TripStore = Depends(get_trip_store),
    validator: TripValidator = Depends(get_trip_validator),
) -> TripLifecycleService:
    return TripLifecycleService(store, validator)


def get_trip_service(store: TripStore = Depends(get_trip_store)) -> TripService:
    return TripService(store)
