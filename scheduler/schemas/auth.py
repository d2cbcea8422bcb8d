"""Authentication schemas for the Task Scheduler."""
from pydantic import BaseModel


class SignInRequest(BaseModel):
    """Sign in request body."""
    password: str


class TokenResponse(BaseModel):
    """Response containing JWT token after sign in."""
    token: str
