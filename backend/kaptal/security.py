"""
JWT helpers for bearer-token sessions.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from kaptal.config import settings

DEFAULT_EXPIRATION_SECONDS = 7 * 24 * 60 * 60

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}


def parse_expiration(value: str) -> int:
    """Convert '15m', '12h', '7d' style strings to seconds (7 days if malformed)."""
    match = re.fullmatch(r"(\d+)([smhd])", value.strip())
    if not match:
        return DEFAULT_EXPIRATION_SECONDS
    return int(match.group(1)) * _UNIT_SECONDS[match.group(2)]


def create_access_token(user_id: str, email: Optional[str] = None, expires_in: Optional[int] = None) -> str:
    """Sign a token whose payload identifies the user."""
    if expires_in is None:
        expires_in = parse_expiration(settings.jwt_expires_in)

    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the payload, or None when the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError:
        return None

    if not payload.get("userId"):
        return None
    return payload
