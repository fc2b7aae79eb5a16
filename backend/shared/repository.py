"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating driver failures into the
application's exception hierarchy.
"""

import logging
from datetime import datetime, timezone
from typing import TypeVar, Generic, Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute() which runs a PostgREST query and maps failures
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class WorkspaceRepository(BaseRepository[Workspace]):
            def get_by_id(self, workspace_id: int) -> Optional[Workspace]:
                result = self._execute(
                    self._db.table("workspaces").select("*").eq("id", workspace_id)
                )
                if not result.data:
                    return None
                return Workspace(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query builder.

        Raises:
            ConflictError: On a unique constraint violation.
            StoreError: On any other database or transport failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    "Resource already exists", code="CONFLICT"
                ) from e
            logger.error(f"Database error in {self.__class__.__name__}: {e.message}")
            raise StoreError() from e
        except httpx.HTTPError as e:
            logger.error(f"Database transport error in {self.__class__.__name__}: {e}")
            raise StoreError() from e

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()
