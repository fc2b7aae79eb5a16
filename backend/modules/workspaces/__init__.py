"""
Workspaces module.

Workspaces are the tenant boundary; memberships grant non-admin users
access to them.
"""

from .interfaces import IWorkspaceService, IWorkspaceRepository, IMembershipRepository
from .models import (
    Workspace,
    Membership,
    CreateWorkspaceRequest,
    UpdateWorkspaceRequest,
    AddMemberRequest,
    WorkspaceAccessResponse,
)
from .exceptions import (
    WorkspaceNotFoundError,
    SlugTakenError,
    InvalidSlugError,
    AlreadyMemberError,
    MembershipNotFoundError,
)

__all__ = [
    "IWorkspaceService",
    "IWorkspaceRepository",
    "IMembershipRepository",
    "Workspace",
    "Membership",
    "CreateWorkspaceRequest",
    "UpdateWorkspaceRequest",
    "AddMemberRequest",
    "WorkspaceAccessResponse",
    "WorkspaceNotFoundError",
    "SlugTakenError",
    "InvalidSlugError",
    "AlreadyMemberError",
    "MembershipNotFoundError",
]
