"""
Authentication module.

Owns the session lifecycle (login, access token validation, refresh,
revocation), password hashing and the access policy.

Public API:
- ISessionManager: Interface for session operations
- IPasswordHasher, ITokenSigner, IRefreshTokenRepository: Collaborator interfaces
- Request/response models for the /api/auth endpoints
- Auth exceptions: InvalidCredentialsError, InvalidTokenError, etc.

Concrete implementations live in service.py, tokens.py, passwords.py,
policy.py and repository.py and are wired in api/dependencies.py.
"""

from .interfaces import (
    ISessionManager,
    IPasswordHasher,
    ITokenSigner,
    IRefreshTokenRepository,
)
from .models import (
    RefreshTokenRecord,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    TokenPair,
    RefreshResult,
    MessageResponse,
)
from .exceptions import (
    InvalidCredentialsError,
    AccountDeactivatedError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidRefreshTokenError,
    TokenNotFoundError,
    WeakPasswordError,
    InsufficientPermissionsError,
    AdminRequiredError,
    EditorRequiredError,
    WorkspaceAccessDeniedError,
    NotOwnerError,
)

__all__ = [
    # Interfaces
    "ISessionManager",
    "IPasswordHasher",
    "ITokenSigner",
    "IRefreshTokenRepository",
    # Models
    "RefreshTokenRecord",
    "LoginRequest",
    "RefreshRequest",
    "LogoutRequest",
    "TokenPair",
    "RefreshResult",
    "MessageResponse",
    # Exceptions
    "InvalidCredentialsError",
    "AccountDeactivatedError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidRefreshTokenError",
    "TokenNotFoundError",
    "WeakPasswordError",
    "InsufficientPermissionsError",
    "AdminRequiredError",
    "EditorRequiredError",
    "WorkspaceAccessDeniedError",
    "NotOwnerError",
]
