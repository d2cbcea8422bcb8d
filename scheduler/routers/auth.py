"""Authentication router for the Task Scheduler."""
from fastapi import APIRouter, Depends, HTTPException, status
import hmac

from scheduler.config import Settings, get_settings
from scheduler.middleware.auth import create_jwt_token
from scheduler.schemas.auth import SignInRequest, TokenResponse
from scheduler.utils.logger import get_logger

router = APIRouter(tags=["Authentication"])  # No prefix since main.py adds /api prefix
logger = get_logger(__name__)


@router.post("/signin", response_model=TokenResponse)
async def sign_in(request: SignInRequest, settings: Settings = Depends(get_settings)):
    """Exchange the configured password for a JWT."""
    if not settings.auth_enabled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Authentication is not configured"
        )

    if not hmac.compare_digest(request.password.encode(), settings.password.encode()):
        logger.warning("Sign in failed: wrong password")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )

    return TokenResponse(token=create_jwt_token(settings))
