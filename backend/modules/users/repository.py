"""
User and role repositories for database access.

Encapsulates all Supabase queries and data mapping for:
- users
- roles
"""

from typing import Optional, Any

from shared.models import RoleName
from shared.repository import BaseRepository
from .models import User, Role

USERS = "users"
ROLES = "roles"

# Embeds the user's role row under the "role" key
USER_COLUMNS = "*, role:roles(*)"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Soft-deleted users (``deleted_at`` set) are filtered out of every
    read, so callers see them as missing.

    Note: This repository does NOT perform authorization checks.
    """

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._execute(
            self._db.table(USERS)
            .select(USER_COLUMNS)
            .eq("email", email)
            .is_("deleted_at", "null")
            .limit(1)
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_id(self, user_id: int) -> Optional[User]:
        result = self._execute(
            self._db.table(USERS)
            .select(USER_COLUMNS)
            .eq("id", user_id)
            .is_("deleted_at", "null")
            .limit(1)
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def list_users(
        self,
        limit: int,
        offset: int,
        role_id: Optional[int] = None,
    ) -> tuple[list[User], int]:
        """
        List users ordered by id.

        Args:
            limit: Page size.
            offset: Number of rows to skip.
            role_id: Optional role filter.

        Returns:
            The page of users and the total number of matching users.
        """
        query = (
            self._db.table(USERS)
            .select(USER_COLUMNS, count="exact")
            .is_("deleted_at", "null")
        )
        if role_id is not None:
            query = query.eq("role_id", role_id)

        result = self._execute(query.order("id").range(offset, offset + limit - 1))
        users = [self._map_to_user(row) for row in result.data or []]
        return users, result.count or 0

    def email_exists(self, email: str) -> bool:
        """Check every row, soft-deleted included: emails stay reserved."""
        result = self._execute(
            self._db.table(USERS).select("id").eq("email", email).limit(1)
        )
        return bool(result.data)

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user and return it with its role loaded.

        Raises:
            ConflictError: If the email is already taken.
        """
        result = self._execute(self._db.table(USERS).insert(data))
        user_id = result.data[0]["id"]
        return self.get_by_id(user_id) or self._map_to_user(result.data[0])

    def update(self, user_id: int, data: dict[str, Any]) -> Optional[User]:
        data = {**data, "updated_at": self._now()}
        result = self._execute(
            self._db.table(USERS)
            .update(data)
            .eq("id", user_id)
            .is_("deleted_at", "null")
        )
        if not result.data:
            return None
        return self.get_by_id(user_id)

    def soft_delete(self, user_id: int) -> bool:
        now = self._now()
        result = self._execute(
            self._db.table(USERS)
            .update({"deleted_at": now, "updated_at": now, "active": False})
            .eq("id", user_id)
            .is_("deleted_at", "null")
        )
        return bool(result.data)

    def count_active_by_role(self, role_id: int) -> int:
        result = self._execute(
            self._db.table(USERS)
            .select("id", count="exact")
            .eq("role_id", role_id)
            .eq("active", True)
            .is_("deleted_at", "null")
        )
        return result.count or 0

    def _map_to_user(self, data: dict[str, Any]) -> User:
        role_data = data.get("role")
        return User(
            id=data["id"],
            email=data["email"],
            password_hash=data["password_hash"],
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            role_id=data["role_id"],
            role=Role(**role_data) if role_data else None,
            active=data.get("active", True),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class RoleRepository(BaseRepository[Role]):
    """Repository for the fixed set of roles."""

    def get_by_name(self, name: RoleName) -> Optional[Role]:
        result = self._execute(
            self._db.table(ROLES).select("*").eq("name", RoleName(name).value).limit(1)
        )
        if not result.data:
            return None
        return self._map_to_role(result.data[0])

    def get_by_id(self, role_id: int) -> Optional[Role]:
        result = self._execute(
            self._db.table(ROLES).select("*").eq("id", role_id).limit(1)
        )
        if not result.data:
            return None
        return self._map_to_role(result.data[0])

    def create(self, name: RoleName, description: str) -> Role:
        result = self._execute(
            self._db.table(ROLES).insert({
                "name": RoleName(name).value,
                "description": description,
            })
        )
        return self._map_to_role(result.data[0])

    def list_roles(self) -> list[Role]:
        result = self._execute(self._db.table(ROLES).select("*").order("id"))
        return [self._map_to_role(row) for row in result.data or []]

    def _map_to_role(self, data: dict[str, Any]) -> Role:
        return Role(
            id=data["id"],
            name=data["name"],
            description=data.get("description") or "",
        )
