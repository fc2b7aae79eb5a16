"""
Workspaces module interfaces.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import (
    Workspace,
    Membership,
    CreateWorkspaceRequest,
    UpdateWorkspaceRequest,
)


@runtime_checkable
class IWorkspaceRepository(Protocol):
    """Data access for the ``workspaces`` table."""

    def get_by_id(self, workspace_id: int) -> Optional[Workspace]:
        ...

    def get_by_slug(self, slug: str) -> Optional[Workspace]:
        ...

    def list_workspaces(self) -> list[Workspace]:
        ...

    def create(self, data: dict[str, Any]) -> Workspace:
        ...

    def update(self, workspace_id: int, data: dict[str, Any]) -> Optional[Workspace]:
        ...

    def delete(self, workspace_id: int) -> bool:
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Data access for the ``user_workspaces`` join table."""

    def is_member(self, user_id: int, workspace_id: int) -> bool:
        ...

    def add(self, user_id: int, workspace_id: int) -> Membership:
        ...

    def remove(self, user_id: int, workspace_id: int) -> bool:
        """Delete the membership; False if there was none."""
        ...

    def list_workspaces_for_user(self, user_id: int) -> list[Workspace]:
        ...


@runtime_checkable
class IWorkspaceService(Protocol):
    """Workspace administration."""

    async def create_workspace(self, request: CreateWorkspaceRequest) -> Workspace:
        ...

    async def get_workspace(self, workspace_id: int) -> Workspace:
        ...

    async def list_workspaces(self) -> list[Workspace]:
        ...

    async def update_workspace(
        self, workspace_id: int, request: UpdateWorkspaceRequest
    ) -> Workspace:
        ...

    async def delete_workspace(self, workspace_id: int) -> None:
        ...

    async def add_member(self, workspace_id: int, user_id: int) -> Membership:
        ...

    async def remove_member(self, workspace_id: int, user_id: int) -> None:
        ...
