"""
Workspace and membership repositories for database access.

Encapsulates all Supabase queries for:
- workspaces
- user_workspaces (membership join table)
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Workspace, Membership

WORKSPACES = "workspaces"
MEMBERSHIPS = "user_workspaces"


class WorkspaceRepository(BaseRepository[Workspace]):
    """
    Repository for workspace rows.

    Deleting a workspace cascades to its memberships in the database.
    """

    def get_by_id(self, workspace_id: int) -> Optional[Workspace]:
        result = self._execute(
            self._db.table(WORKSPACES).select("*").eq("id", workspace_id).limit(1)
        )
        if not result.data:
            return None
        return Workspace(**result.data[0])

    def get_by_slug(self, slug: str) -> Optional[Workspace]:
        result = self._execute(
            self._db.table(WORKSPACES).select("*").eq("slug", slug).limit(1)
        )
        if not result.data:
            return None
        return Workspace(**result.data[0])

    def list_workspaces(self) -> list[Workspace]:
        result = self._execute(self._db.table(WORKSPACES).select("*").order("id"))
        return [Workspace(**row) for row in result.data or []]

    def create(self, data: dict[str, Any]) -> Workspace:
        result = self._execute(self._db.table(WORKSPACES).insert(data))
        return Workspace(**result.data[0])

    def update(self, workspace_id: int, data: dict[str, Any]) -> Optional[Workspace]:
        data = {**data, "updated_at": self._now()}
        result = self._execute(
            self._db.table(WORKSPACES).update(data).eq("id", workspace_id)
        )
        if not result.data:
            return None
        return Workspace(**result.data[0])

    def delete(self, workspace_id: int) -> bool:
        result = self._execute(
            self._db.table(WORKSPACES).delete().eq("id", workspace_id)
        )
        return bool(result.data)


class MembershipRepository(BaseRepository[Membership]):
    """Repository for user-to-workspace grants."""

    def is_member(self, user_id: int, workspace_id: int) -> bool:
        result = self._execute(
            self._db.table(MEMBERSHIPS)
            .select("id")
            .eq("user_id", user_id)
            .eq("workspace_id", workspace_id)
            .limit(1)
        )
        return bool(result.data)

    def add(self, user_id: int, workspace_id: int) -> Membership:
        """
        Raises:
            ConflictError: If the membership already exists.
        """
        result = self._execute(
            self._db.table(MEMBERSHIPS).insert({
                "user_id": user_id,
                "workspace_id": workspace_id,
            })
        )
        return Membership(**result.data[0])

    def remove(self, user_id: int, workspace_id: int) -> bool:
        result = self._execute(
            self._db.table(MEMBERSHIPS)
            .delete()
            .eq("user_id", user_id)
            .eq("workspace_id", workspace_id)
        )
        return bool(result.data)

    def list_workspaces_for_user(self, user_id: int) -> list[Workspace]:
        result = self._execute(
            self._db.table(MEMBERSHIPS)
            .select("workspace:workspaces(*)")
            .eq("user_id", user_id)
            .order("workspace_id")
        )
        return [
            Workspace(**row["workspace"])
            for row in result.data or []
            if row.get("workspace")
        ]
