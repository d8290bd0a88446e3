"""
Integration tests for trip creation, reads and Sentinel approval
"""
import pytest
from httpx import AsyncClient

from motoroute.models.trip import TripStatus


def _payload(gpx_track):
    return {
        "title": "Transalpina in due giorni",
        "summary": "Dal Piemonte alla Savoia lungo gli sterrati",
        "destination": "Alpi Occidentali",
        "stages": [
            {
                "title": "Susa - Sestriere",
                "description": "Strada dell'Assietta",
                "gpx_file": {"filename": "assietta.gpx", "content": gpx_track},
                "media": [{"id": "temp-abc", "url": "https://cdn.example.com/assietta.jpg"}],
            },
            {
                "title": "Sestriere - Briancon",
                "description": "Colle del Monginevro",
                "gpx_file": {"filename": "monginevro.gpx", "content": gpx_track},
            },
        ],
    }


@pytest.mark.asyncio
async def test_create_trip(async_client: AsyncClient, ranger, auth_headers, gpx_track):
    """Test creating a draft trip"""
    r = await async_client.post("/trips", json=_payload(gpx_track), headers=auth_headers(ranger))

    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["status"] == "Bozza"
    assert data["user_id"] == ranger.id
    assert data["slug"] == "transalpina-in-due-giorni"
    assert data["next_statuses"] == ["Pronto_per_revisione", "Pubblicato", "Archiviato"]
    assert data["stages"][0]["gpx_filename"] == "assietta.gpx"
    assert not data["stages"][0]["media"][0]["id"].startswith("temp-")


@pytest.mark.asyncio
async def test_create_then_publish(async_client: AsyncClient, ranger, auth_headers, gpx_track):
    headers = auth_headers(ranger)
    created = await async_client.post("/trips", json=_payload(gpx_track), headers=headers)
    trip_id = created.json()["data"]["id"]

    r = await async_client.patch(f"/trips/{trip_id}/publish", headers=headers)

    assert r.status_code == 200, r.text
    assert r.json()["data"]["status"] == "Pubblicato"


@pytest.mark.asyncio
async def test_explorer_cannot_create_trip(async_client: AsyncClient, explorer, auth_headers, gpx_track):
    r = await async_client.post("/trips", json=_payload(gpx_track), headers=auth_headers(explorer))

    assert r.status_code == 403
    assert r.json()["details"]["reason"] == "role_cannot_author"


@pytest.mark.asyncio
async def test_create_trip_requires_title(async_client: AsyncClient, ranger, auth_headers, gpx_track):
    payload = _payload(gpx_track)
    del payload["title"]

    r = await async_client.post("/trips", json=payload, headers=auth_headers(ranger))

    assert r.status_code == 422
    assert r.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_trip_visibility(async_client: AsyncClient, seed_trip, ranger, other_ranger, explorer, auth_headers):
    draft = await seed_trip(ranger)
    published = await seed_trip(ranger, status=TripStatus.PUBLISHED)

    own = await async_client.get(f"/trips/{draft.id}", headers=auth_headers(ranger))
    hidden = await async_client.get(f"/trips/{draft.id}", headers=auth_headers(other_ranger))
    shared = await async_client.get(f"/trips/{published.id}", headers=auth_headers(explorer))

    assert own.status_code == 200
    assert own.json()["data"]["title"] == draft.title
    assert hidden.status_code == 403
    assert shared.status_code == 200


@pytest.mark.asyncio
async def test_admin_approves_trip(async_client: AsyncClient, seed_trip, ranger, sentinel, auth_headers):
    """Test Sentinel approval of a trip awaiting review"""
    trip = await seed_trip(ranger, status=TripStatus.PENDING_REVIEW)

    r = await async_client.patch(f"/admin/trips/{trip.id}/approve", headers=auth_headers(sentinel))

    assert r.status_code == 200, r.text
    assert r.json()["data"]["status"] == "Pubblicato"


@pytest.mark.asyncio
async def test_admin_approve_requires_sentinel(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    trip = await seed_trip(ranger, status=TripStatus.PENDING_REVIEW)

    r = await async_client.patch(f"/admin/trips/{trip.id}/approve", headers=auth_headers(ranger))

    assert r.status_code == 403
    assert r.json()["details"]["reason"] == "admin_panel_required"


@pytest.mark.asyncio
async def test_admin_approve_still_validates(async_client: AsyncClient, seed_trip, ranger, sentinel, auth_headers):
    trip = await seed_trip(ranger, stage_count=0, status=TripStatus.PENDING_REVIEW)

    r = await async_client.patch(f"/admin/trips/{trip.id}/approve", headers=auth_headers(sentinel))

    assert r.status_code == 400
    assert r.json()["details"]["validation_errors"][0]["code"] == "STAGES_REQUIRED"


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    r = await async_client.get("/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "testing"
    assert "error_statistics" in body


@pytest.mark.asyncio
async def test_create_trip_with_duplicate_stage_order(async_client: AsyncClient, ranger, auth_headers, gpx_track):
    payload = _payload(gpx_track)
    payload["stages"][0]["order_index"] = 1
    payload["stages"][1]["order_index"] = 1

    r = await async_client.post("/trips", json=payload, headers=auth_headers(ranger))

    assert r.status_code == 422
    body = r.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["details"]["validation_errors"][0]["field"] == "body.stages"
