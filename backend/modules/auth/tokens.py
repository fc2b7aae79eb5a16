"""
Access token signing and verification (PyJWT).

Tokens are HMAC-signed with a single configured algorithm. Verification
only accepts that algorithm, which rules out "alg: none" and
algorithm-confusion tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.models import TokenClaims
from modules.users.models import User

from .exceptions import InvalidTokenError, ExpiredTokenError

REQUIRED_CLAIMS = ["exp", "iat", "sub"]


class TokenSigner:
    """Implementation of ITokenSigner."""

    def __init__(
        self,
        secret: str,
        access_ttl: timedelta,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self._access_ttl = access_ttl
        self._algorithm = algorithm

    def issue(self, user: User, workspace_id: Optional[int] = None) -> str:
        """
        Sign an access token for ``user``.

        The user must have its role loaded: the role name is frozen into
        the token until it expires.
        """
        if user.role is None:
            raise ValueError(f"Role not loaded for user {user.id}")

        now = datetime.now(timezone.utc)
        payload = {
            "user_id": user.id,
            "email": user.email,
            "role_id": user.role_id,
            "role_name": user.role.name.value,
            "sub": str(user.id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._access_ttl).timestamp()),
        }
        if workspace_id is not None:
            payload["workspace_id"] = workspace_id

        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature, algorithm and expiry, then parse the claims.

        A token whose ``exp`` equals the current second is already expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError()

        if claims.sub != str(claims.user_id):
            raise InvalidTokenError()

        return claims
