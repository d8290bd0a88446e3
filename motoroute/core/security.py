"""Session token issue / verify utilities."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from motoroute.config import get_settings


def issue_token(user_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
    security = get_settings().security
    if expires_minutes is None:
        expires_minutes = security.access_token_expire_minutes
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, security.jwt_secret, algorithm=security.jwt_algorithm)


def verify_token(token: str) -> Dict[str, Any]:
    security = get_settings().security
    try:
        return jwt.decode(token, security.jwt_secret, algorithms=[security.jwt_algorithm])
    except jwt.PyJWTError:
        return {}
