"""
Users module.

User administration (admin only) and the current user's profile.

Public API:
- IUserService: Interface for user operations
- IUserRepository, IRoleRepository: Data access interfaces
- User, Role, UserPublic and request/response models
- User exceptions: UserNotFoundError, LastAdminError, etc.
"""

from .interfaces import IUserService, IUserRepository, IRoleRepository
from .models import (
    User,
    Role,
    UserPublic,
    CreateUserRequest,
    UpdateUserRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
    UserListResponse,
    CurrentUserResponse,
    normalize_email,
)
from .exceptions import (
    UserNotFoundError,
    RoleNotFoundError,
    EmailTakenError,
    LastAdminError,
    InvalidPasswordError,
)

__all__ = [
    # Interfaces
    "IUserService",
    "IUserRepository",
    "IRoleRepository",
    # Models
    "User",
    "Role",
    "UserPublic",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UpdateProfileRequest",
    "ChangePasswordRequest",
    "UserListResponse",
    "CurrentUserResponse",
    "normalize_email",
    # Exceptions
    "UserNotFoundError",
    "RoleNotFoundError",
    "EmailTakenError",
    "LastAdminError",
    "InvalidPasswordError",
]
