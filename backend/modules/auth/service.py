"""
Session manager implementation.

Owns the credential lifecycle: login, access token validation, refresh
and revocation.

Access tokens are stateless. Once issued they stay valid until they
expire, even if the user's role changes or they log out. Refresh tokens
are stored, and they are the only credential that can be revoked.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from starlette.concurrency import run_in_threadpool

from shared.exceptions import StoreError
from shared.models import TokenClaims
from modules.users.interfaces import IUserRepository
from modules.users.models import normalize_email
from modules.workspaces.interfaces import IWorkspaceRepository
from modules.workspaces.exceptions import WorkspaceNotFoundError

from .interfaces import (
    ISessionManager,
    IRefreshTokenRepository,
    IPasswordHasher,
    ITokenSigner,
)
from .models import TokenPair, RefreshResult
from .policy import AccessPolicy
from .exceptions import (
    InvalidCredentialsError,
    AccountDeactivatedError,
    MissingTokenError,
    InvalidRefreshTokenError,
    TokenNotFoundError,
    WorkspaceAccessDeniedError,
)

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32


class SessionManager(ISessionManager):
    """
    Implementation of the session manager.

    Collaborators are injected so the manager can run against Supabase in
    production and in-memory fakes in tests. Blocking store calls run on
    the thread pool.
    """

    def __init__(
        self,
        users: IUserRepository,
        refresh_tokens: IRefreshTokenRepository,
        workspaces: IWorkspaceRepository,
        hasher: IPasswordHasher,
        signer: ITokenSigner,
        policy: AccessPolicy,
        refresh_ttl: timedelta,
        rotate_refresh_tokens: bool = False,
    ):
        self._users = users
        self._refresh_tokens = refresh_tokens
        self._workspaces = workspaces
        self._hasher = hasher
        self._signer = signer
        self._policy = policy
        self._refresh_ttl = refresh_ttl
        self._rotate = rotate_refresh_tokens

    async def login(
        self, email: str, password: str, workspace_id: Optional[int] = None
    ) -> TokenPair:
        """
        Authenticate with email and password.

        The refresh token row is written before the access token is
        signed, so a failed write means the caller gets nothing.
        """
        user = await run_in_threadpool(self._users.get_by_email, normalize_email(email))

        if user is None:
            await self._hasher.verify_dummy(password)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not await self._hasher.verify(password, user.password_hash):
            logger.info(f"Login failed: invalid credentials for user {user.id}")
            raise InvalidCredentialsError()

        if not user.active:
            logger.info(f"Login rejected: user {user.id} is deactivated")
            raise AccountDeactivatedError()

        if user.role is None:
            logger.error(f"User {user.id} has no role row (role_id={user.role_id})")
            raise StoreError()

        if workspace_id is not None:
            await self._check_workspace(user, workspace_id)

        refresh_token = await self._create_refresh_token(user.id, workspace_id)
        access_token = self._signer.issue(user, workspace_id)

        logger.info(f"User {user.id} logged in")
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def validate_token(self, token: Optional[str]) -> TokenClaims:
        """Verify an access token. Claims are trusted until expiry."""
        if not token:
            raise MissingTokenError()
        return self._signer.decode(token)

    async def refresh(self, refresh_token: str) -> RefreshResult:
        """
        Exchange a refresh token for an access token.

        The new token carries the user's current role and the workspace
        chosen at login. Unknown, expired and revoked tokens are rejected
        alike, as are tokens whose owner has since been deleted or
        deactivated. Workspace access is checked again, so a user removed
        from the workspace must log in again.
        """
        record = await run_in_threadpool(self._refresh_tokens.find_active, refresh_token)
        if record is None:
            raise InvalidRefreshTokenError()

        user = await run_in_threadpool(self._users.get_by_id, record.user_id)
        if user is None or not user.active or user.role is None:
            raise InvalidRefreshTokenError()

        if record.workspace_id is not None:
            await self._check_workspace(user, record.workspace_id)

        new_refresh_token = None
        if self._rotate:
            revoked = await run_in_threadpool(
                self._refresh_tokens.revoke_if_active, refresh_token
            )
            if not revoked:
                # Another request used this token first
                raise InvalidRefreshTokenError()
            new_refresh_token = await self._create_refresh_token(
                user.id, record.workspace_id
            )

        logger.debug(f"Refreshed access token for user {user.id}")
        return RefreshResult(
            access_token=self._signer.issue(user, record.workspace_id),
            refresh_token=new_refresh_token,
        )

    async def revoke_token(self, refresh_token: str) -> None:
        """Revoke a refresh token. Revoking twice is not an error."""
        matched = await run_in_threadpool(self._refresh_tokens.revoke, refresh_token)
        if not matched:
            raise TokenNotFoundError()
        logger.info("Refresh token revoked")

    async def revoke_all_for_user(self, user_id: int) -> int:
        count = await run_in_threadpool(self._refresh_tokens.revoke_all_for_user, user_id)
        logger.info(f"Revoked {count} refresh token(s) for user {user_id}")
        return count

    async def _check_workspace(self, user, workspace_id: int) -> None:
        # Membership first, so non-admins cannot discover which ids exist
        if not await self._policy.has_workspace_access(user.id, user.role.name, workspace_id):
            raise WorkspaceAccessDeniedError(workspace_id)
        workspace = await run_in_threadpool(self._workspaces.get_by_id, workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)

    async def _create_refresh_token(
        self, user_id: int, workspace_id: Optional[int] = None
    ) -> str:
        token = secrets.token_hex(REFRESH_TOKEN_BYTES)
        expires_at = datetime.now(timezone.utc) + self._refresh_ttl
        await run_in_threadpool(
            self._refresh_tokens.create, user_id, token, expires_at, workspace_id
        )
        return token
