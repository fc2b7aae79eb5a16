"""
User service implementation.

Admin user management plus the current user's self-service profile.
"""

import logging
from typing import Any, Optional

from starlette.concurrency import run_in_threadpool

from shared.models import RoleName
from modules.auth.interfaces import IPasswordHasher, ISessionManager
from modules.auth.passwords import validate_password_strength
from modules.workspaces.interfaces import IMembershipRepository

from .interfaces import IUserService, IUserRepository, IRoleRepository
from .models import (
    User,
    UserPublic,
    UserListResponse,
    CreateUserRequest,
    UpdateUserRequest,
    UpdateProfileRequest,
    CurrentUserResponse,
)
from .exceptions import (
    UserNotFoundError,
    RoleNotFoundError,
    EmailTakenError,
    LastAdminError,
    InvalidPasswordError,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    Implementation of the user service.

    Enforces the invariants the store can't: at least one active admin
    must remain, passwords meet the strength policy, and deleting or
    deactivating a user revokes their refresh tokens.
    """

    def __init__(
        self,
        users: IUserRepository,
        roles: IRoleRepository,
        memberships: IMembershipRepository,
        hasher: IPasswordHasher,
        sessions: ISessionManager,
        password_min_length: int = 8,
    ):
        self._users = users
        self._roles = roles
        self._memberships = memberships
        self._hasher = hasher
        self._sessions = sessions
        self._password_min_length = password_min_length

    async def create_user(self, request: CreateUserRequest) -> UserPublic:
        validate_password_strength(request.password, self._password_min_length)

        role = await run_in_threadpool(self._roles.get_by_id, request.role_id)
        if role is None:
            raise RoleNotFoundError(request.role_id)

        if await run_in_threadpool(self._users.email_exists, request.email):
            raise EmailTakenError()

        password_hash = await self._hasher.hash(request.password)
        user = await run_in_threadpool(self._users.create, {
            "email": request.email,
            "password_hash": password_hash,
            "first_name": request.first_name,
            "last_name": request.last_name,
            "role_id": role.id,
            "active": True,
        })
        logger.info(f"Created user {user.id} with role '{role.name.value}'")
        return user.to_public()

    async def get_user(self, user_id: int) -> UserPublic:
        return (await self._get_user(user_id)).to_public()

    async def list_users(
        self, limit: int = 10, offset: int = 0, role_id: Optional[int] = None
    ) -> UserListResponse:
        users, total = await run_in_threadpool(
            self._users.list_users, limit, offset, role_id
        )
        return UserListResponse(
            users=[u.to_public() for u in users],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def update_user(self, user_id: int, request: UpdateUserRequest) -> UserPublic:
        """
        Apply an admin update.

        Raises:
            UserNotFoundError: If the user doesn't exist.
            RoleNotFoundError: If ``role_id`` names no role.
            EmailTakenError: If the new email belongs to someone else.
            LastAdminError: If this would demote or deactivate the only admin.
        """
        user = await self._get_user(user_id)
        changes = request.model_dump(exclude_none=True)

        await self._check_email_change(user, changes)

        new_role_name = user.role_name
        if "role_id" in changes and changes["role_id"] != user.role_id:
            role = await run_in_threadpool(self._roles.get_by_id, changes["role_id"])
            if role is None:
                raise RoleNotFoundError(changes["role_id"])
            new_role_name = role.name

        loses_admin = new_role_name != RoleName.ADMIN or changes.get("active") is False
        if loses_admin:
            await self._ensure_not_last_admin(
                user, "Cannot demote or deactivate the only admin user"
            )

        updated = await self._apply(user_id, changes)

        if changes.get("active") is False and user.active:
            await self._sessions.revoke_all_for_user(user_id)

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return updated.to_public()

    async def delete_user(self, user_id: int) -> None:
        user = await self._get_user(user_id)
        await self._ensure_not_last_admin(user, "Cannot delete the only admin user")

        if not await run_in_threadpool(self._users.soft_delete, user_id):
            raise UserNotFoundError(user_id)

        await self._sessions.revoke_all_for_user(user_id)
        logger.info(f"Deleted user {user_id}")

    async def get_current_user(self, user_id: int) -> CurrentUserResponse:
        user = await self._get_user(user_id)
        workspaces = await run_in_threadpool(
            self._memberships.list_workspaces_for_user, user_id
        )
        return CurrentUserResponse(user=user.to_public(), workspaces=workspaces)

    async def update_current_user(
        self, user_id: int, request: UpdateProfileRequest
    ) -> UserPublic:
        user = await self._get_user(user_id)
        changes = request.model_dump(exclude_none=True)
        await self._check_email_change(user, changes)
        updated = await self._apply(user_id, changes)
        return updated.to_public()

    async def change_password(
        self, user_id: int, old_password: str, new_password: str
    ) -> None:
        user = await self._get_user(user_id)

        if not await self._hasher.verify(old_password, user.password_hash):
            logger.info(f"Password change rejected for user {user_id}: wrong old password")
            raise InvalidPasswordError()

        validate_password_strength(new_password, self._password_min_length)

        password_hash = await self._hasher.hash(new_password)
        await self._apply(user_id, {"password_hash": password_hash})
        logger.info(f"Password changed for user {user_id}")

    async def _get_user(self, user_id: int) -> User:
        user = await run_in_threadpool(self._users.get_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _apply(self, user_id: int, changes: dict[str, Any]) -> User:
        if not changes:
            return await self._get_user(user_id)
        updated = await run_in_threadpool(self._users.update, user_id, changes)
        if updated is None:
            raise UserNotFoundError(user_id)
        return updated

    async def _check_email_change(self, user: User, changes: dict[str, Any]) -> None:
        email = changes.get("email")
        if email is None:
            return
        if email == user.email:
            del changes["email"]
            return
        if await run_in_threadpool(self._users.email_exists, email):
            raise EmailTakenError()

    async def _ensure_not_last_admin(self, user: User, message: str) -> None:
        if user.role_name != RoleName.ADMIN or not user.active:
            return
        remaining = await run_in_threadpool(self._users.count_active_by_role, user.role_id)
        if remaining <= 1:
            raise LastAdminError(message)
