"""JWT authentication for the Task Scheduler API."""
from fastapi import HTTPException, Depends, status, Request
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional

from scheduler.config import Settings, get_settings
from scheduler.utils.logger import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
TOKEN_COOKIE = "token"


def password_hash(password: str) -> str:
    """Value stored in the ``pwd_hash`` claim; tokens die when the password changes."""
    return password


def create_jwt_token(settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "pwd_hash": password_hash(settings.password),
        "iat": now,
        "exp": now + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.password, algorithm=ALGORITHM)


def _extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token

    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]  # Remove "Bearer " prefix
    return None


def validate_token(token: str, password: str) -> bool:
    """Check signature, expiry and that the token was issued for the current password."""
    try:
        payload = jwt.decode(token, password, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning("Rejected token", reason=str(e))
        return False
    return payload.get("pwd_hash") == password_hash(password)


async def require_auth(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Guard for protected endpoints.

    The token is read from the ``token`` cookie, falling back to an
    ``Authorization: Bearer`` header. With no password configured,
    authentication is disabled and every request passes.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if not settings.auth_enabled:
        return

    token = _extract_token(request)
    if not token or not validate_token(token, settings.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
