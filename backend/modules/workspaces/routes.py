"""
Workspace API endpoints.

Management endpoints are admin-only. The access check is open to any
authenticated user and answers for the caller only.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_workspace_service
from api.middleware.auth import require_admin, require_workspace_access
from shared.models import TokenClaims

from .interfaces import IWorkspaceService
from .models import (
    Workspace,
    Membership,
    CreateWorkspaceRequest,
    UpdateWorkspaceRequest,
    AddMemberRequest,
    WorkspaceAccessResponse,
)

router = APIRouter()


@router.post("", response_model=Workspace, status_code=201)
async def create_workspace(
    request: CreateWorkspaceRequest,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> Workspace:
    """Create a workspace. The slug is derived from the name if omitted."""
    return await service.create_workspace(request)


@router.get("", response_model=list[Workspace])
async def list_workspaces(
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> list[Workspace]:
    return await service.list_workspaces()


@router.get("/{workspace_id}", response_model=Workspace)
async def get_workspace(
    workspace_id: int,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> Workspace:
    return await service.get_workspace(workspace_id)


@router.put("/{workspace_id}", response_model=Workspace)
async def update_workspace(
    workspace_id: int,
    request: UpdateWorkspaceRequest,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> Workspace:
    return await service.update_workspace(workspace_id, request)


@router.delete("/{workspace_id}", status_code=204)
async def delete_workspace(
    workspace_id: int,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> None:
    """Delete a workspace and all of its memberships."""
    await service.delete_workspace(workspace_id)


@router.post("/{workspace_id}/users", response_model=Membership, status_code=201)
async def add_member(
    workspace_id: int,
    request: AddMemberRequest,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> Membership:
    return await service.add_member(workspace_id, request.user_id)


@router.delete("/{workspace_id}/users/{user_id}", status_code=204)
async def remove_member(
    workspace_id: int,
    user_id: int,
    _: TokenClaims = Depends(require_admin),
    service: IWorkspaceService = Depends(get_workspace_service),
) -> None:
    await service.remove_member(workspace_id, user_id)


@router.get("/{workspace_id}/access", response_model=WorkspaceAccessResponse)
async def check_access(
    workspace_id: int,
    claims: TokenClaims = Depends(require_workspace_access),
) -> WorkspaceAccessResponse:
    """
    Check that the caller may work in this workspace.

    Returns 403 unless the caller is an admin or a member.
    """
    return WorkspaceAccessResponse(workspace_id=workspace_id, user_id=claims.user_id)
