"""
Authentication and authorization dependencies.

Extracts the bearer token, validates it through the session manager and
asks the access policy for role and workspace decisions. Failures are
raised as FloeError subclasses and rendered by the app's error handler.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.models import TokenClaims
from modules.auth.interfaces import ISessionManager
from modules.auth.policy import AccessPolicy

from ..dependencies import get_session_manager, get_access_policy

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: ISessionManager = Depends(get_session_manager),
    policy: AccessPolicy = Depends(get_access_policy),
) -> TokenClaims:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(claims: TokenClaims = Depends(get_current_claims)):
            return {"user_id": claims.user_id}
    """
    claims = None
    message = "Authorization header required"
    if credentials is not None:
        claims = await sessions.validate_token(credentials.credentials)
    elif request.headers.get("Authorization"):
        message = "Invalid Authorization header format"

    return policy.require_authenticated(claims, message)


async def require_admin(
    claims: TokenClaims = Depends(get_current_claims),
    policy: AccessPolicy = Depends(get_access_policy),
) -> TokenClaims:
    """Dependency that allows only admins (403 otherwise)."""
    return policy.require_admin(claims)


async def require_workspace_access(
    workspace_id: int,
    claims: TokenClaims = Depends(get_current_claims),
    policy: AccessPolicy = Depends(get_access_policy),
) -> TokenClaims:
    """
    Dependency for routes with a ``{workspace_id}`` path parameter.

    Admins pass; everyone else needs a membership in that workspace.
    """
    return await policy.require_workspace_access(claims, workspace_id)

