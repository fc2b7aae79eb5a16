"""
Base exception classes for the Floe backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API
layer maps each base class to a single HTTP status code.
"""

from typing import Optional, Any


class FloeError(Exception):
    """
    Base exception for all Floe errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(FloeError):
    """Resource not found."""

    status_code = 404


class ValidationError(FloeError):
    """Input validation failed."""

    status_code = 400


class ConflictError(FloeError):
    """A unique constraint would be violated."""

    status_code = 409


class AuthenticationError(FloeError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(FloeError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class StoreError(FloeError):
    """
    The relational store failed.

    The original cause is kept on ``__cause__`` for logs; the message
    exposed to clients is always generic.
    """

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")
