"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RoleName(str, Enum):
    """
    The fixed set of roles.

    Roles are ordered: admin > editor > viewer. Nothing outside
    modules/auth/policy.py should compare role names directly.
    """

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    @property
    def description(self) -> str:
        return _ROLE_DESCRIPTIONS[self]

    def at_least(self, other: "RoleName") -> bool:
        """True if this role grants everything ``other`` grants."""
        return self.rank >= other.rank


_ROLE_RANKS = {
    RoleName.VIEWER: 0,
    RoleName.EDITOR: 1,
    RoleName.ADMIN: 2,
}

_ROLE_DESCRIPTIONS = {
    RoleName.ADMIN: "Administrator with full access",
    RoleName.EDITOR: "Editor with content management access",
    RoleName.VIEWER: "Viewer with read-only access",
}


class TokenClaims(BaseModel):
    """
    Claims carried by an access token.

    This model is populated from a verified JWT and made available
    to route handlers via dependency injection. The role is the one the
    user held when the token was issued.
    """

    user_id: int = Field(..., description="User ID")
    email: str = Field(..., description="User's email address at issuance")
    role_id: int = Field(..., description="Role ID")
    role_name: RoleName = Field(..., description="Role name at issuance")
    workspace_id: Optional[int] = Field(None, description="Active workspace, if selected at login")

    # Registered claims
    sub: str = Field(..., description="Subject (user ID as a string)")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role_name == RoleName.ADMIN
