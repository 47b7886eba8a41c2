"""
Security utilities - session token creation and validation.
The session cookie carries a signed JWT whose "sub" claim is the user's UUID.
"""

import uuid
from datetime import datetime, timedelta, timezone  # For token expiration
from typing import Optional

from jose import JWTError, jwt  # python-jose library for JWT encoding/decoding

from app.core.config import settings  # App configuration


def create_session_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed session token (JWT).

    Args:
        subject: The user's ID, stored in the "sub" claim
        expires_delta: Optional custom lifetime; defaults to
                       SESSION_TOKEN_EXPIRE_MINUTES from settings

    Returns:
        A signed JWT string (e.g., "eyJhbGciOiJIUzI1NiIs...")

    The payload is only base64 encoded, not encrypted. The signature
    proves it wasn't tampered with.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.SESSION_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> Optional[uuid.UUID]:
    """
    Validate a session token and return the user ID it was issued for.

    Returns None for any invalid token: bad signature, expired,
    missing "sub" claim, or a subject that isn't a UUID.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None

    try:
        return uuid.UUID(subject)
    except (TypeError, ValueError):
        return None
