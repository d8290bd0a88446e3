"""
Shared fixtures: in-memory trip store, actors, trip factory and an HTTP client
wired to the application with the store injected.
"""
import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECURITY_JWT_SECRET", "test-secret-key-for-motoroute-tests")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from motoroute.core.dependencies import get_trip_store
from motoroute.core.security import issue_token
from motoroute.main import app
from motoroute.models.internal_models import (
    Actor,
    GpxAttachment,
    MediaItem,
    StageSnapshot,
    TripSnapshot,
)
from motoroute.models.trip import TripStatus
from motoroute.models.user import UserRole
from motoroute.services.trip_store import InMemoryTripStore


GPX_TRACK = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Passo dello Stelvio</name>
    <trkseg>
      <trkpt lat="46.5286" lon="10.4531"><ele>2757</ele></trkpt>
      <trkpt lat="46.5310" lon="10.4480"><ele>2700</ele></trkpt>
      <trkpt lat="46.5352" lon="10.4402"><ele>2610</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


def make_stage(position: int, **overrides) -> StageSnapshot:
    fields = dict(
        order_index=position,
        title=f"Tappa {position + 1}",
        description="Curve strette e panorami sulle Alpi",
        route_type="mountain",
        gpx_file=GpxAttachment(filename=f"stage-{position + 1}.gpx", content=GPX_TRACK),
    )
    fields.update(overrides)
    return StageSnapshot(**fields)


def make_trip_snapshot(owner_id: int, stage_count: int = 2, **overrides) -> TripSnapshot:
    """A trip that passes every publication check unless overridden"""
    fields = dict(
        user_id=owner_id,
        slug=f"giro-delle-dolomiti-{owner_id}-{stage_count}",
        title="Giro delle Dolomiti",
        summary="Tre giorni tra i passi dolomitici in sella",
        destination="Dolomiti",
        theme="mountain",
        duration_days=max(1, stage_count),
        duration_nights=max(0, stage_count - 1),
        status=TripStatus.DRAFT,
        stages=[make_stage(position) for position in range(stage_count)],
        media=[MediaItem(id="media-1", url="https://cdn.example.com/dolomiti.jpg", caption="Passo Giau")],
    )
    fields.update(overrides)
    return TripSnapshot(**fields)


@pytest.fixture
def gpx_track():
    return GPX_TRACK


@pytest.fixture
def trip_factory():
    return make_trip_snapshot


@pytest.fixture
def stage_factory():
    return make_stage


@pytest.fixture
def trip_store():
    return InMemoryTripStore()


@pytest.fixture
def ranger():
    return Actor(id=1, role=UserRole.RANGER)


@pytest.fixture
def other_ranger():
    return Actor(id=2, role=UserRole.RANGER)


@pytest.fixture
def sentinel():
    return Actor(id=3, role=UserRole.SENTINEL)


@pytest.fixture
def explorer():
    return Actor(id=4, role=UserRole.EXPLORER)


@pytest.fixture
def seed_trip(trip_store):
    """Factory that stores a trip and returns its snapshot"""

    async def _seed(owner: Actor, stage_count: int = 2, **overrides) -> TripSnapshot:
        return await trip_store.add_trip(make_trip_snapshot(owner.id, stage_count, **overrides))

    return _seed


@pytest.fixture
def auth_headers():
    """Factory building a Bearer header for an actor"""

    def _headers(actor: Actor) -> dict:
        token = issue_token(actor.id, actor.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def async_client(trip_store):
    """HTTP client against the app with the in-memory store injected"""
    app.dependency_overrides[get_trip_store] = lambda: trip_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
