from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a portal access token.

    The role claim is informational only; every use case re-reads the
    actor's role from storage before authorizing.
    """
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES)
    claims = {
        "user_id": str(user_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """Decoded claims, or None when the token is malformed, expired or has no usable user_id"""
    try:
        claims = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    try:
        UUID(str(claims.get("user_id")))
    except ValueError:
        return None
    return claims
