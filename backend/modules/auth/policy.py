"""
Access policy evaluation.

Turns validated token claims into allow/deny decisions. This is the only
place that interprets role semantics; handlers ask the policy instead of
comparing role names themselves.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from shared.models import RoleName, TokenClaims
from modules.workspaces.interfaces import IMembershipRepository

from .exceptions import (
    MissingTokenError,
    AdminRequiredError,
    EditorRequiredError,
    WorkspaceAccessDeniedError,
    NotOwnerError,
)

logger = logging.getLogger(__name__)


class AccessPolicy:
    """
    Authorization decisions at four granularities:

    - authenticated: any validated token
    - role: admin-only, or editor-or-above
    - workspace: admins always; others need a live membership row
    - resource: the author/uploader, or an admin

    Workspace access is checked against the store on every call, so
    adding or removing a membership takes effect immediately, even for
    tokens issued earlier.
    """

    def __init__(self, memberships: IMembershipRepository):
        self._memberships = memberships

    def require_authenticated(
        self, claims: Optional[TokenClaims], message: str = "Authentication required"
    ) -> TokenClaims:
        if claims is None:
            raise MissingTokenError(message)
        return claims

    def require_admin(self, claims: TokenClaims) -> TokenClaims:
        if not claims.role_name.at_least(RoleName.ADMIN):
            raise AdminRequiredError(claims.role_name.value)
        return claims

    def require_editor(self, claims: TokenClaims) -> TokenClaims:
        if not claims.role_name.at_least(RoleName.EDITOR):
            raise EditorRequiredError(claims.role_name.value)
        return claims

    async def has_workspace_access(
        self, user_id: int, role_name: RoleName, workspace_id: int
    ) -> bool:
        if role_name == RoleName.ADMIN:
            return True
        return await run_in_threadpool(self._memberships.is_member, user_id, workspace_id)

    async def require_workspace_access(
        self, claims: TokenClaims, workspace_id: int
    ) -> TokenClaims:
        """
        Raises:
            WorkspaceAccessDeniedError: Non-admin without a membership row.
        """
        if not await self.has_workspace_access(claims.user_id, claims.role_name, workspace_id):
            logger.info(
                f"Workspace access denied: user {claims.user_id} -> workspace {workspace_id}"
            )
            raise WorkspaceAccessDeniedError(workspace_id)
        return claims

    def can_modify(self, claims: TokenClaims, owner_id: int) -> bool:
        """Author-or-admin rule for mutating a content or media item."""
        return claims.is_admin or claims.user_id == owner_id

    def require_owner_or_admin(self, claims: TokenClaims, owner_id: int) -> TokenClaims:
        if not self.can_modify(claims, owner_id):
            raise NotOwnerError()
        return claims
