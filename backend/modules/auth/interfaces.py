"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
storage or signing backend without touching callers.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import TokenClaims
from modules.users.models import User

from .models import RefreshTokenRecord, TokenPair, RefreshResult


@runtime_checkable
class IRefreshTokenRepository(Protocol):
    """Persistence for opaque refresh tokens."""

    def create(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
        workspace_id: Optional[int] = None,
    ) -> RefreshTokenRecord:
        """Store a token; ``workspace_id`` is the workspace chosen at login."""
        ...

    def find_active(self, token: str) -> Optional[RefreshTokenRecord]:
        """Return the token row if it is neither revoked nor expired."""
        ...

    def revoke(self, token: str) -> bool:
        """
        Mark the token revoked regardless of its current state.

        Returns:
            True if a row matched the token string.
        """
        ...

    def revoke_if_active(self, token: str) -> bool:
        """Revoke only if not already revoked; True if this call revoked it."""
        ...

    def revoke_all_for_user(self, user_id: int) -> int:
        ...


@runtime_checkable
class IPasswordHasher(Protocol):
    """One-way adaptive password hashing."""

    async def hash(self, password: str) -> str:
        ...

    async def verify(self, password: str, password_hash: str) -> bool:
        ...

    async def verify_dummy(self, password: str) -> bool:
        """Spend the same time as a real verify; always False."""
        ...


@runtime_checkable
class ITokenSigner(Protocol):
    """Creates and verifies signed access tokens."""

    def issue(self, user: User, workspace_id: Optional[int] = None) -> str:
        ...

    def decode(self, token: str) -> TokenClaims:
        """
        Raises:
            ExpiredTokenError: If the token has expired.
            InvalidTokenError: For any other verification failure.
        """
        ...


@runtime_checkable
class ISessionManager(Protocol):
    """
    Interface for session and token lifecycle operations.

    This is the sole authority for creating, validating, refreshing and
    revoking credentials.
    """

    async def login(
        self, email: str, password: str, workspace_id: Optional[int] = None
    ) -> TokenPair:
        """
        Authenticate with email and password.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            AccountDeactivatedError: Correct password, inactive account.
            WorkspaceAccessDeniedError: ``workspace_id`` not accessible.
            WorkspaceNotFoundError: ``workspace_id`` does not exist (admins only).
            StoreError: The refresh token could not be persisted.
        """
        ...

    async def validate_token(self, token: Optional[str]) -> TokenClaims:
        """
        Verify an access token without touching the store.

        Raises:
            MissingTokenError: If no token was supplied.
            InvalidTokenError: If the token is invalid or expired.
        """
        ...

    async def refresh(self, refresh_token: str) -> RefreshResult:
        """
        Exchange a refresh token for a new access token.

        Raises:
            InvalidRefreshTokenError: Unknown, expired or revoked token.
            WorkspaceAccessDeniedError: The login workspace is no longer accessible.
            WorkspaceNotFoundError: The login workspace was deleted.
        """
        ...

    async def revoke_token(self, refresh_token: str) -> None:
        """
        Raises:
            TokenNotFoundError: If the token was never issued.
        """
        ...

    async def revoke_all_for_user(self, user_id: int) -> int:
        ...
