# lockbox/app/security/jwt.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from lockbox.app.core.config import settings


def create_access_token(
        subject: str,
        email: Optional[str] = None,
        expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign an access token for `subject` (the vault owner id).

    Issuing tokens belongs to the login service; this helper signs with the
    same settings the AuthGate verifies against.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": now, "exp": now + expires_delta}
    if email is not None:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry. Raises jose.JWTError on any failure."""
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require_exp": True},
    )
