"""
Authentication module exceptions.

These exceptions are raised by the auth module and are turned into
HTTP responses by the API error handler. Messages are deliberately
generic: none of them reveals whether an email address is registered.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown email or a wrong password."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class AccountDeactivatedError(AuthenticationError):
    """Raised when a correct password is given for a deactivated account."""

    def __init__(self):
        super().__init__("User account is deactivated", code="ACCOUNT_DEACTIVATED")


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid or expired token", code: str = "INVALID_TOKEN"):
        super().__init__(message, code=code)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token is unknown, expired or revoked."""

    def __init__(self):
        super().__init__("Invalid refresh token", code="INVALID_REFRESH_TOKEN")


class TokenNotFoundError(NotFoundError):
    """Raised when revoking a refresh token that was never issued."""

    def __init__(self):
        super().__init__("Token not found", code="TOKEN_NOT_FOUND")


class WeakPasswordError(ValidationError):
    """Raised when a new password does not satisfy the password policy."""

    def __init__(self, message: str):
        super().__init__(message, code="WEAK_PASSWORD")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, message: str, required_role: str, user_role: str):
        super().__init__(
            message,
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class AdminRequiredError(InsufficientPermissionsError):
    def __init__(self, user_role: str):
        super().__init__("Admin access required", "admin", user_role)


class EditorRequiredError(InsufficientPermissionsError):
    def __init__(self, user_role: str):
        super().__init__("Editor or admin access required", "editor", user_role)


class WorkspaceAccessDeniedError(AuthorizationError):
    """Raised when a non-admin user is not a member of the workspace."""

    def __init__(self, workspace_id: int):
        super().__init__(
            "Access denied to this workspace",
            code="WORKSPACE_ACCESS_DENIED",
            details={"workspace_id": workspace_id},
        )


class NotOwnerError(AuthorizationError):
    """Raised when a non-admin user mutates a resource they did not create."""

    def __init__(self):
        super().__init__(
            "Only the author or an admin can modify this resource",
            code="NOT_OWNER",
        )
