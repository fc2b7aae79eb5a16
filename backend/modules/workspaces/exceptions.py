"""
Workspaces module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class WorkspaceNotFoundError(NotFoundError):
    def __init__(self, workspace_id: int):
        super().__init__(
            "Workspace not found",
            code="WORKSPACE_NOT_FOUND",
            details={"workspace_id": workspace_id},
        )


class SlugTakenError(ConflictError):
    def __init__(self, slug: str):
        super().__init__(
            "Workspace slug is already taken",
            code="SLUG_TAKEN",
            details={"slug": slug},
        )


class InvalidSlugError(ValidationError):
    def __init__(self, value: str):
        super().__init__(
            "Workspace slug must contain at least one letter or digit",
            code="INVALID_SLUG",
            details={"value": value},
        )


class AlreadyMemberError(ValidationError):
    """Raised when adding a user who already belongs to the workspace."""

    def __init__(self, user_id: int, workspace_id: int):
        super().__init__(
            "User is already in this workspace",
            code="ALREADY_MEMBER",
            details={"user_id": user_id, "workspace_id": workspace_id},
        )


class MembershipNotFoundError(NotFoundError):
    def __init__(self, user_id: int, workspace_id: int):
        super().__init__(
            "User is not in this workspace",
            code="MEMBERSHIP_NOT_FOUND",
            details={"user_id": user_id, "workspace_id": workspace_id},
        )
