"""
Users module exceptions.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when a user doesn't exist (or was soft-deleted)."""

    def __init__(self, user_id: int | str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class RoleNotFoundError(ValidationError):
    """Raised when a request references a role that doesn't exist."""

    def __init__(self, role_id: int | str):
        super().__init__(
            "Role not found",
            code="ROLE_NOT_FOUND",
            details={"role_id": role_id},
        )


class EmailTakenError(ConflictError):
    def __init__(self):
        super().__init__("Email is already taken", code="EMAIL_TAKEN")


class LastAdminError(ValidationError):
    """Raised when an operation would leave no active admin."""

    def __init__(self, message: str = "Cannot delete the only admin user"):
        super().__init__(message, code="LAST_ADMIN")


class InvalidPasswordError(AuthenticationError):
    """Raised when the current password given to change-password is wrong."""

    def __init__(self):
        super().__init__("Invalid old password", code="INVALID_PASSWORD")
