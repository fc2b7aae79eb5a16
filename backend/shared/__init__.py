"""
Shared infrastructure for Floe backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- models: Role enumeration and access token claims
- repository: Base repository with error translation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings, resolve_jwt_secret
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    FloeError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    StoreError,
)
from .models import RoleName, TokenClaims

__all__ = [
    "Settings",
    "get_settings",
    "resolve_jwt_secret",
    "get_supabase_client",
    "reset_client_cache",
    "FloeError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "StoreError",
    "RoleName",
    "TokenClaims",
]
