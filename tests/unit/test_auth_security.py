import jwt
import pytest
from starlette.requests import Request

from motoroute.config import get_settings
from motoroute.core.dependencies import get_current_actor, require_actor
from motoroute.core.exceptions import AuthenticationRequiredError
from motoroute.core.security import issue_token, verify_token
from motoroute.models.user import UserRole


def _request(headers: dict) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


def test_issue_and_verify_token():
    token = issue_token(7, "Ranger", expires_minutes=5)
    payload = verify_token(token)
    assert payload.get("sub") == "7"
    assert payload.get("role") == "Ranger"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = issue_token(7, "Ranger", expires_minutes=-1)
    assert verify_token(token) == {}


def test_token_signed_with_another_secret_is_rejected():
    token = jwt.encode({"sub": "7", "role": "Sentinel"}, "not-the-secret", algorithm="HS256")
    assert verify_token(token) == {}


@pytest.mark.asyncio
async def test_current_actor_from_bearer_token():
    token = issue_token(11, UserRole.SENTINEL.value)
    actor = await get_current_actor(_request({"Authorization": f"Bearer {token}"}))
    assert actor.id == 11
    assert actor.role == UserRole.SENTINEL


@pytest.mark.asyncio
async def test_missing_or_malformed_credentials_give_no_actor():
    assert await get_current_actor(_request({})) is None
    assert await get_current_actor(_request({"Authorization": "Basic abc"})) is None
    assert await get_current_actor(_request({"Authorization": "Bearer garbage"})) is None


@pytest.mark.asyncio
async def test_unknown_role_claim_gives_no_actor():
    security = get_settings().security
    token = jwt.encode({"sub": "5", "role": "Admin"}, security.jwt_secret, algorithm=security.jwt_algorithm)
    assert await get_current_actor(_request({"Authorization": f"Bearer {token}"})) is None


@pytest.mark.asyncio
async def test_require_actor_rejects_anonymous():
    with pytest.raises(AuthenticationRequiredError):
        await require_actor(None)
