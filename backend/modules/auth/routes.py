"""
Authentication API endpoints.

Login, access token refresh and logout (refresh token revocation).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_session_manager
from api.models import ErrorResponse
from api.middleware.auth import get_current_claims
from shared.models import TokenClaims

from .interfaces import ISessionManager
from .models import (
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    TokenPair,
    RefreshResult,
    MessageResponse,
)

router = APIRouter()

AUTH_ERRORS = {401: {"model": ErrorResponse}}


@router.post("/login", response_model=TokenPair, responses=AUTH_ERRORS)
async def login(
    request: LoginRequest,
    sessions: ISessionManager = Depends(get_session_manager),
) -> TokenPair:
    """
    Exchange email and password for an access/refresh token pair.

    Unknown emails and wrong passwords get the same 401 response. Asking
    for a workspace the user cannot enter is a 403; an admin asking for a
    workspace that does not exist gets a 404.
    """
    return await sessions.login(request.email, request.password, request.workspace_id)


@router.post(
    "/refresh",
    response_model=RefreshResult,
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
)
async def refresh(
    request: RefreshRequest,
    sessions: ISessionManager = Depends(get_session_manager),
) -> RefreshResult:
    """
    Get a new access token for a valid refresh token.

    When refresh token rotation is enabled the response also carries the
    replacement refresh token; the old one stops working. The workspace
    chosen at login is kept, provided the user can still access it.
    """
    return await sessions.refresh(request.refresh_token)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={**AUTH_ERRORS, 404: {"model": ErrorResponse}},
)
async def logout(
    request: LogoutRequest,
    claims: TokenClaims = Depends(get_current_claims),
    sessions: ISessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Revoke a refresh token. Access tokens stay valid until they expire."""
    await sessions.revoke_token(request.refresh_token)
    return MessageResponse(message="Successfully logged out")
