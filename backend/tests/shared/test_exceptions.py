"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    FloeError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    StoreError,
)


class TestFloeError:
    def test_defaults(self):
        error = FloeError("Something broke")
        assert str(error) == "Something broke"
        assert error.code == "FloeError"
        assert error.details == {}
        assert error.status_code == 500

    def test_to_dict(self):
        error = NotFoundError("User not found", code="USER_NOT_FOUND", details={"user_id": 3})
        assert error.to_dict() == {
            "error": "USER_NOT_FOUND",
            "message": "User not found",
            "details": {"user_id": 3},
        }


class TestStatusCodes:
    @pytest.mark.parametrize("cls, status", [
        (NotFoundError, 404),
        (ValidationError, 400),
        (ConflictError, 409),
        (AuthenticationError, 401),
        (AuthorizationError, 403),
    ])
    def test_status_codes(self, cls, status):
        error = cls("x")
        assert error.status_code == status
        assert isinstance(error, FloeError)


class TestStoreError:
    def test_message_is_generic(self):
        try:
            try:
                raise ConnectionError("db host 10.0.0.7 refused connection")
            except ConnectionError as e:
                raise StoreError() from e
        except StoreError as error:
            assert error.to_dict() == {
                "error": "INTERNAL_ERROR",
                "message": "Internal server error",
                "details": {},
            }
            assert isinstance(error.__cause__, ConnectionError)
