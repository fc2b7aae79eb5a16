"""
Password hashing and password policy.

bcrypt is deliberately slow, so every call is pushed onto the thread pool
instead of running on the event loop.
"""

from typing import Optional

import bcrypt
from starlette.concurrency import run_in_threadpool

from .exceptions import WeakPasswordError

# bcrypt only looks at the first 72 bytes; newer releases raise instead.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt-backed implementation of IPasswordHasher."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash_sync(self, password: str) -> str:
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds))
        return hashed.decode("utf-8")

    def verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(self.verify_sync, password, password_hash)

    async def verify_dummy(self, password: str) -> bool:
        """
        Run a full bcrypt comparison against a throwaway hash.

        Used when the account does not exist, so that response time does
        not reveal which emails are registered.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await run_in_threadpool(
                bcrypt.hashpw, b"floe-dummy-password", bcrypt.gensalt(rounds=self._rounds)
            )
        await run_in_threadpool(bcrypt.checkpw, _encode(password), self._dummy_hash)
        return False


def validate_password_strength(password: str, min_length: int = 8) -> None:
    """
    Enforce the password policy.

    Raises:
        WeakPasswordError: If the password is too short or lacks an
            upper-case letter, a lower-case letter or a digit.
    """
    if len(password) < min_length:
        raise WeakPasswordError(
            f"Password must be at least {min_length} characters long"
        )

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)

    if not (has_upper and has_lower and has_digit):
        raise WeakPasswordError(
            "Password must contain at least one uppercase letter, "
            "one lowercase letter, and one number"
        )
