"""
Integration tests for trip publication and lifecycle endpoints
"""
import pytest
from httpx import AsyncClient

from motoroute.core.exceptions import UnexpectedFailureError
from motoroute.models.trip import TripStatus


@pytest.mark.asyncio
async def test_publish_trip_without_stages(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    """Test that publishing a stage-less trip returns 400 with the issue list"""
    trip = await seed_trip(ranger, stage_count=0)

    r = await async_client.patch(f"/trips/{trip.id}/publish", headers=auth_headers(ranger))

    assert r.status_code == 400, r.text
    body = r.json()
    assert body["error_code"] == "VALIDATION_FAILED"
    assert body["message"] == "Trip cannot be published"
    errors = body["details"]["validation_errors"]
    assert [e["code"] for e in errors] == ["STAGES_REQUIRED"]
    assert errors[0]["field"] == "stages"


@pytest.mark.asyncio
async def test_publish_valid_trip(async_client: AsyncClient, seed_trip, trip_store, ranger, auth_headers):
    """Test successful publication by the author"""
    trip = await seed_trip(ranger, stage_count=3)

    r = await async_client.patch(f"/trips/{trip.id}/publish", headers=auth_headers(ranger))

    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["status"] == "Pubblicato"
    assert data["next_statuses"] == ["Archiviato"]
    assert [stage["label"] for stage in data["stages"]] == ["01", "02", "03"]
    assert (await trip_store.find_trip_by_id(trip.id)).status == TripStatus.PUBLISHED


@pytest.mark.asyncio
async def test_publish_by_non_owner_ranger(async_client: AsyncClient, seed_trip, trip_store, ranger, other_ranger, auth_headers):
    trip = await seed_trip(ranger)

    r = await async_client.patch(f"/trips/{trip.id}/publish", headers=auth_headers(other_ranger))

    assert r.status_code == 403
    body = r.json()
    assert body["error_code"] == "PERMISSION_DENIED"
    assert body["details"]["reason"] == "not_owner"
    assert (await trip_store.find_trip_by_id(trip.id)).status == TripStatus.DRAFT


@pytest.mark.asyncio
async def test_publish_by_sentinel(async_client: AsyncClient, seed_trip, ranger, sentinel, auth_headers):
    trip = await seed_trip(ranger)

    r = await async_client.patch(f"/trips/{trip.id}/publish", headers=auth_headers(sentinel))

    assert r.status_code == 200
    assert r.json()["data"]["status"] == "Pubblicato"
    assert r.json()["data"]["user_id"] == ranger.id


@pytest.mark.asyncio
async def test_publish_twice_with_expected_status(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    trip = await seed_trip(ranger)
    headers = auth_headers(ranger)

    first = await async_client.patch(
        f"/trips/{trip.id}/publish", json={"expected_status": "Bozza"}, headers=headers
    )
    second = await async_client.patch(
        f"/trips/{trip.id}/publish", json={"expected_status": "Bozza"}, headers=headers
    )

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error_code"] == "CONCURRENT_MODIFICATION"
    assert second.json()["details"]["actual_status"] == "Pubblicato"


@pytest.mark.asyncio
async def test_publish_archived_trip(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    trip = await seed_trip(ranger, status=TripStatus.ARCHIVED)

    r = await async_client.patch(f"/trips/{trip.id}/publish", headers=auth_headers(ranger))

    assert r.status_code == 409
    assert r.json()["error_code"] == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_publish_missing_trip(async_client: AsyncClient, ranger, auth_headers):
    r = await async_client.patch("/trips/9999/publish", headers=auth_headers(ranger))

    assert r.status_code == 404
    assert r.json()["error_code"] == "TRIP_NOT_FOUND"


@pytest.mark.asyncio
async def test_publish_without_session(async_client: AsyncClient, seed_trip, ranger):
    trip = await seed_trip(ranger)

    r = await async_client.patch(f"/trips/{trip.id}/publish")

    assert r.status_code == 401
    assert r.json()["error_code"] == "AUTHENTICATION_REQUIRED"


@pytest.mark.asyncio
async def test_validate_requires_session(async_client: AsyncClient, seed_trip, ranger):
    trip = await seed_trip(ranger)

    r = await async_client.get(f"/trips/{trip.id}/validate")

    assert r.status_code == 401


@pytest.mark.asyncio
async def test_validate_reports_all_issues(async_client: AsyncClient, seed_trip, trip_store, ranger, auth_headers):
    """Test the dry-run check lists every problem without changing status"""
    trip = await seed_trip(ranger, stage_count=0, summary="breve", destination="")

    r = await async_client.get(f"/trips/{trip.id}/validate", headers=auth_headers(ranger))

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["is_valid"] is False
    assert {e["code"] for e in data["validation_errors"]} == {
        "SUMMARY_LENGTH",
        "DESTINATION_REQUIRED",
        "STAGES_REQUIRED",
    }
    assert (await trip_store.find_trip_by_id(trip.id)).status == TripStatus.DRAFT


@pytest.mark.asyncio
async def test_validate_valid_trip(async_client: AsyncClient, seed_trip, ranger, sentinel, auth_headers):
    trip = await seed_trip(ranger)

    r = await async_client.get(f"/trips/{trip.id}/validate", headers=auth_headers(sentinel))

    assert r.status_code == 200
    assert r.json()["data"] == {"is_valid": True, "validation_errors": []}


@pytest.mark.asyncio
async def test_status_change_flow(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    """Test submitting for review, publishing, then archiving"""
    trip = await seed_trip(ranger)
    headers = auth_headers(ranger)

    for target in ("Pronto_per_revisione", "Pubblicato", "Archiviato"):
        r = await async_client.patch(
            f"/trips/{trip.id}/status", json={"target_status": target}, headers=headers
        )
        assert r.status_code == 200, r.text
        assert r.json()["data"]["status"] == target

    assert r.json()["data"]["next_statuses"] == []


@pytest.mark.asyncio
async def test_status_change_back_to_draft_is_invalid(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    trip = await seed_trip(ranger, status=TripStatus.PUBLISHED)

    r = await async_client.patch(
        f"/trips/{trip.id}/status", json={"target_status": "Bozza"}, headers=auth_headers(ranger)
    )

    assert r.status_code == 409
    body = r.json()
    assert body["error_code"] == "INVALID_TRANSITION"
    assert body["details"] == {"current_status": "Pubblicato", "target_status": "Bozza"}


@pytest.mark.asyncio
async def test_status_change_with_stale_expectation(async_client: AsyncClient, seed_trip, ranger, auth_headers):
    trip = await seed_trip(ranger, status=TripStatus.PENDING_REVIEW)

    r = await async_client.patch(
        f"/trips/{trip.id}/status",
        json={"target_status": "Archiviato", "expected_status": "Bozza"},
        headers=auth_headers(ranger),
    )

    assert r.status_code == 409
    assert r.json()["error_code"] == "CONCURRENT_MODIFICATION"


@pytest.mark.asyncio
async def test_storage_failure_is_reported(async_client: AsyncClient, trip_store, ranger, auth_headers, monkeypatch):
    async def broken_find(trip_id):
        raise UnexpectedFailureError("find_trip_by_id", ConnectionError("db down"))

    monkeypatch.setattr(trip_store, "find_trip_by_id", broken_find)

    r = await async_client.patch("/trips/1/publish", headers=auth_headers(ranger))

    assert r.status_code == 500
    body = r.json()
    assert body["error_code"] == "UNEXPECTED_FAILURE"
    assert body["details"]["operation"] == "find_trip_by_id"
