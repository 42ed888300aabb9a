# halaleco/auth/tokens.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from ..config import settings
from ..utils.logging import logger


def issue_token(user_id: str, email: str, role: str = "user") -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "role": role or "user",
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_IN_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


REQUIRED_CLAIMS = ["exp", "iat", "userId", "email"]


def verify_token(token: str) -> Dict[str, Any] | None:
    """Decoded claims, or None on a bad signature, expiry, missing claim or malformed token."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.InvalidTokenError as e:
        logger.warning("JWT verification failed: %s", e)
        return None
