"""
Workspace service implementation.
"""

import logging
import re

from starlette.concurrency import run_in_threadpool

from shared.exceptions import ConflictError
from modules.users.interfaces import IUserRepository
from modules.users.exceptions import UserNotFoundError

from .interfaces import IWorkspaceService, IWorkspaceRepository, IMembershipRepository
from .models import (
    Workspace,
    Membership,
    CreateWorkspaceRequest,
    UpdateWorkspaceRequest,
)
from .exceptions import (
    WorkspaceNotFoundError,
    SlugTakenError,
    InvalidSlugError,
    AlreadyMemberError,
    MembershipNotFoundError,
)

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]+")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def slugify(value: str) -> str:
    """
    Turn a display name into a URL slug.

    >>> slugify("  My Team's  Site! ")
    'my-teams-site'
    """
    slug = value.strip().lower().replace(" ", "-")
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


class WorkspaceService(IWorkspaceService):
    """Implementation of workspace administration."""

    def __init__(
        self,
        workspaces: IWorkspaceRepository,
        memberships: IMembershipRepository,
        users: IUserRepository,
    ):
        self._workspaces = workspaces
        self._memberships = memberships
        self._users = users

    async def create_workspace(self, request: CreateWorkspaceRequest) -> Workspace:
        """
        Create a workspace. The slug defaults to one derived from the name.

        Raises:
            InvalidSlugError: If no usable slug can be derived.
            SlugTakenError: If another workspace has the slug.
        """
        slug = await self._claim_slug(request.slug or request.name)
        workspace = await run_in_threadpool(self._workspaces.create, {
            "name": request.name,
            "slug": slug,
            "description": request.description,
        })
        logger.info(f"Created workspace {workspace.id} ({slug})")
        return workspace

    async def get_workspace(self, workspace_id: int) -> Workspace:
        workspace = await run_in_threadpool(self._workspaces.get_by_id, workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        return workspace

    async def list_workspaces(self) -> list[Workspace]:
        return await run_in_threadpool(self._workspaces.list_workspaces)

    async def update_workspace(
        self, workspace_id: int, request: UpdateWorkspaceRequest
    ) -> Workspace:
        workspace = await self.get_workspace(workspace_id)
        changes = request.model_dump(exclude_none=True)

        if "slug" in changes:
            slug = slugify(changes["slug"])
            if slug == workspace.slug:
                del changes["slug"]
            else:
                changes["slug"] = await self._claim_slug(slug)

        if not changes:
            return workspace

        updated = await run_in_threadpool(self._workspaces.update, workspace_id, changes)
        if updated is None:
            raise WorkspaceNotFoundError(workspace_id)
        logger.info(f"Updated workspace {workspace_id}: {sorted(changes)}")
        return updated

    async def delete_workspace(self, workspace_id: int) -> None:
        if not await run_in_threadpool(self._workspaces.delete, workspace_id):
            raise WorkspaceNotFoundError(workspace_id)
        logger.info(f"Deleted workspace {workspace_id}")

    async def add_member(self, workspace_id: int, user_id: int) -> Membership:
        await self.get_workspace(workspace_id)

        user = await run_in_threadpool(self._users.get_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if await run_in_threadpool(self._memberships.is_member, user_id, workspace_id):
            raise AlreadyMemberError(user_id, workspace_id)

        try:
            membership = await run_in_threadpool(self._memberships.add, user_id, workspace_id)
        except ConflictError as e:
            raise AlreadyMemberError(user_id, workspace_id) from e

        logger.info(f"Added user {user_id} to workspace {workspace_id}")
        return membership

    async def remove_member(self, workspace_id: int, user_id: int) -> None:
        removed = await run_in_threadpool(self._memberships.remove, user_id, workspace_id)
        if not removed:
            raise MembershipNotFoundError(user_id, workspace_id)
        logger.info(f"Removed user {user_id} from workspace {workspace_id}")

    async def _claim_slug(self, value: str) -> str:
        slug = slugify(value)
        if not slug:
            raise InvalidSlugError(value)
        if await run_in_threadpool(self._workspaces.get_by_slug, slug) is not None:
            raise SlugTakenError(slug)
        return slug
