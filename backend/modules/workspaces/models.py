"""
Workspaces module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Workspace(BaseModel):
    """A tenant boundary."""

    id: int
    name: str
    slug: str
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Membership(BaseModel):
    """Grants a user access to a workspace."""

    id: int
    user_id: int
    workspace_id: int
    created_at: Optional[datetime] = None


class CreateWorkspaceRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, description="Derived from name if omitted")
    description: str = ""


class UpdateWorkspaceRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class AddMemberRequest(BaseModel):
    user_id: int


class WorkspaceAccessResponse(BaseModel):
    workspace_id: int
    user_id: int
    access: bool = True
