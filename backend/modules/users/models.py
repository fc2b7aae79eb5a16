"""
Users module data models.

``User`` and ``Role`` mirror database rows. ``UserPublic`` is what the API
returns: it never carries the password hash.
"""

from datetime import datetime
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, EmailStr, Field

from shared.models import RoleName
from modules.workspaces.models import Workspace


class Role(BaseModel):
    """A named permission bundle."""

    id: int
    name: RoleName
    description: str = ""


class User(BaseModel):
    """A user row, with its role embedded when loaded."""

    id: int
    email: str
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    role_id: int
    role: Optional[Role] = None
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def role_name(self) -> Optional[RoleName]:
        return self.role.name if self.role else None

    def to_public(self) -> "UserPublic":
        return UserPublic(**self.model_dump(exclude={"password_hash"}))


class UserPublic(BaseModel):
    """User data safe to return to clients."""

    id: int
    email: str
    first_name: str = ""
    last_name: str = ""
    role_id: int
    role: Optional[Role] = None
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def normalize_email(value: str) -> str:
    """Emails are stored and compared in lower case."""
    return value.strip().lower()


NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]


class CreateUserRequest(BaseModel):
    email: NormalizedEmail
    password: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    role_id: int


class UpdateUserRequest(BaseModel):
    """Admin update; omitted fields are left unchanged."""

    email: Optional[NormalizedEmail] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role_id: Optional[int] = None
    active: Optional[bool] = None


class UpdateProfileRequest(BaseModel):
    """Self-service update of the current user's profile."""

    email: Optional[NormalizedEmail] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserListResponse(BaseModel):
    users: list[UserPublic]
    total: int
    limit: int
    offset: int


class CurrentUserResponse(BaseModel):
    """The current user's profile with the workspaces they belong to."""

    user: UserPublic
    workspaces: list[Workspace] = Field(default_factory=list)
