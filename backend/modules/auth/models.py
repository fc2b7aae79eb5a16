"""
Authentication module data models.

These models define the request/response bodies of the auth endpoints
and the persisted refresh token record.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RefreshTokenRecord(BaseModel):
    """
    A persisted refresh token.

    Only the ``revoked`` flag ever changes after creation.
    """

    id: int
    user_id: int
    workspace_id: Optional[int] = None
    token: str
    expires_at: datetime
    revoked: bool = False
    created_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    """Credentials submitted to /api/auth/login."""

    email: str = Field(..., min_length=1, description="Account email")
    password: str = Field(..., min_length=1, description="Plaintext password")
    workspace_id: Optional[int] = Field(
        None, description="Workspace to embed in the access token"
    )


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPair(BaseModel):
    """Tokens returned by a successful login."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshResult(BaseModel):
    """
    Result of exchanging a refresh token.

    ``refresh_token`` is only set when rotation is enabled; otherwise the
    client keeps using the token it already has.
    """

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
