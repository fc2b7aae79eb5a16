"""
Users module interfaces.

Other modules should depend on these protocols, not the Supabase-backed
implementations. Tests provide in-memory implementations.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from shared.models import RoleName

from .models import (
    User,
    Role,
    UserPublic,
    UserListResponse,
    CreateUserRequest,
    UpdateUserRequest,
    UpdateProfileRequest,
    CurrentUserResponse,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Data access for the ``users`` table. Soft-deleted rows are invisible."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Find a user (with role) by exact, already-normalised email."""
        ...

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def list_users(
        self,
        limit: int,
        offset: int,
        role_id: Optional[int] = None,
    ) -> tuple[list[User], int]:
        """Return one page of users and the total count."""
        ...

    def email_exists(self, email: str) -> bool:
        ...

    def create(self, data: dict[str, Any]) -> User:
        ...

    def update(self, user_id: int, data: dict[str, Any]) -> Optional[User]:
        """Apply ``data`` and return the updated user, or None if missing."""
        ...

    def soft_delete(self, user_id: int) -> bool:
        ...

    def count_active_by_role(self, role_id: int) -> int:
        ...


@runtime_checkable
class IRoleRepository(Protocol):
    """Data access for the ``roles`` table."""

    def get_by_name(self, name: RoleName) -> Optional[Role]:
        ...

    def get_by_id(self, role_id: int) -> Optional[Role]:
        ...

    def create(self, name: RoleName, description: str) -> Role:
        ...

    def list_roles(self) -> list[Role]:
        ...


@runtime_checkable
class IUserService(Protocol):
    """User administration and self-service profile operations."""

    async def create_user(self, request: CreateUserRequest) -> UserPublic:
        ...

    async def get_user(self, user_id: int) -> UserPublic:
        ...

    async def list_users(
        self, limit: int = 10, offset: int = 0, role_id: Optional[int] = None
    ) -> UserListResponse:
        ...

    async def update_user(self, user_id: int, request: UpdateUserRequest) -> UserPublic:
        ...

    async def delete_user(self, user_id: int) -> None:
        """
        Soft-delete a user.

        Raises:
            LastAdminError: If the user is the only remaining admin.
        """
        ...

    async def get_current_user(self, user_id: int) -> CurrentUserResponse:
        ...

    async def update_current_user(
        self, user_id: int, request: UpdateProfileRequest
    ) -> UserPublic:
        ...

    async def change_password(
        self, user_id: int, old_password: str, new_password: str
    ) -> None:
        """
        Replace the user's password.

        Raises:
            InvalidPasswordError: If ``old_password`` does not verify.
            WeakPasswordError: If ``new_password`` fails the policy.
        """
        ...
