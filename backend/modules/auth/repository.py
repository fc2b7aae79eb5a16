"""
Refresh token repository for database access.

Encapsulates all Supabase queries for the ``refresh_tokens`` table.
Rows are never deleted or enumerated to clients; only ``revoked`` changes.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from shared.repository import BaseRepository
from .models import RefreshTokenRecord

TABLE = "refresh_tokens"


class RefreshTokenRepository(BaseRepository[RefreshTokenRecord]):
    """
    Repository for refresh token rows.

    Note: This repository does NOT perform authorization checks.
    The session manager decides who may use or revoke a token.
    """

    def create(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
        workspace_id: Optional[int] = None,
    ) -> RefreshTokenRecord:
        """
        Insert a new, unrevoked refresh token scoped to ``workspace_id``.

        Raises:
            StoreError: If the insert fails.
        """
        data = {
            "user_id": user_id,
            "workspace_id": workspace_id,
            "token": token,
            "expires_at": expires_at.isoformat(),
            "revoked": False,
        }
        result = self._execute(self._db.table(TABLE).insert(data))
        return self._map_to_record(result.data[0])

    def find_active(self, token: str) -> Optional[RefreshTokenRecord]:
        """Find a token that is not revoked and expires strictly after now."""
        now = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            self._db.table(TABLE)
            .select("*")
            .eq("token", token)
            .eq("revoked", False)
            .gt("expires_at", now)
            .limit(1)
        )
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def revoke(self, token: str) -> bool:
        """
        Set ``revoked`` on the row matching ``token``.

        Matches on the token string alone, so revoking an already-revoked
        token still reports a match.
        """
        result = self._execute(
            self._db.table(TABLE).update({"revoked": True}).eq("token", token)
        )
        return bool(result.data)

    def revoke_if_active(self, token: str) -> bool:
        """
        Conditionally revoke: only a row with ``revoked = false`` is updated.

        Of several concurrent callers, exactly one sees True.
        """
        result = self._execute(
            self._db.table(TABLE)
            .update({"revoked": True})
            .eq("token", token)
            .eq("revoked", False)
        )
        return bool(result.data)

    def revoke_all_for_user(self, user_id: int) -> int:
        result = self._execute(
            self._db.table(TABLE)
            .update({"revoked": True})
            .eq("user_id", user_id)
            .eq("revoked", False)
        )
        return len(result.data or [])

    def _map_to_record(self, data: dict[str, Any]) -> RefreshTokenRecord:
        return RefreshTokenRecord(
            id=data["id"],
            user_id=data["user_id"],
            workspace_id=data.get("workspace_id"),
            token=data["token"],
            expires_at=data["expires_at"],
            revoked=data.get("revoked", False),
            created_at=data.get("created_at"),
        )
