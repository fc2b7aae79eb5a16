"""Tests for the startup bootstrap."""

import pytest
from unittest.mock import MagicMock

from shared.exceptions import StoreError
from shared.models import RoleName
from modules.auth.bootstrap import ensure_admin_exists, reset_admin_user
from modules.users.exceptions import UserNotFoundError

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def run_bootstrap(store, hasher, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    ensure_admin_exists(
        roles=store.roles,
        users=store.users,
        workspaces=store.workspaces,
        memberships=store.memberships,
        hasher=hasher,
        email=email,
        password=password,
    )


class TestEnsureAdminExists:
    def test_fresh_store(self, store, hasher):
        run_bootstrap(store, hasher)

        assert {r.name for r in store.roles.list_roles()} == set(RoleName)
        admin_role = store.roles.get_by_name(RoleName.ADMIN)
        assert admin_role.description == "Administrator with full access"

        admin = store.users.get_by_email(ADMIN_EMAIL)
        assert admin.role_name == RoleName.ADMIN
        assert admin.active is True
        assert admin.first_name == "Admin"
        assert admin.last_name == "User"
        assert hasher.verify_sync(ADMIN_PASSWORD, admin.password_hash)

        workspace = store.workspaces.get_by_slug("default")
        assert workspace.name == "Default"
        assert workspace.description == "Default workspace"
        assert store.memberships.is_member(admin.id, workspace.id)

    def test_is_idempotent(self, store, hasher):
        run_bootstrap(store, hasher)
        admin = store.users.get_by_email(ADMIN_EMAIL)

        run_bootstrap(store, hasher)

        assert len(store.roles.list_roles()) == 3
        assert len(store.users.rows) == 1
        assert len(store.workspaces.list_workspaces()) == 1
        assert len(store.memberships.memberships) == 1
        assert store.users.get_by_email(ADMIN_EMAIL).password_hash == admin.password_hash

    def test_existing_admin_password_is_kept(self, store, hasher):
        run_bootstrap(store, hasher)
        run_bootstrap(store, hasher, password="Different1")

        admin = store.users.get_by_email(ADMIN_EMAIL)
        assert hasher.verify_sync(ADMIN_PASSWORD, admin.password_hash)

    def test_fills_in_missing_pieces(self, store, hasher):
        run_bootstrap(store, hasher)
        admin = store.users.get_by_email(ADMIN_EMAIL)
        workspace = store.workspaces.get_by_slug("default")
        store.memberships.remove(admin.id, workspace.id)

        run_bootstrap(store, hasher)

        assert store.memberships.is_member(admin.id, workspace.id)

    def test_email_is_normalised(self, store, hasher):
        run_bootstrap(store, hasher, email="  Admin@Floe.IO ")
        assert store.users.get_by_email("admin@floe.io") is not None

    def test_deleted_admin_is_not_recreated(self, store, hasher, caplog):
        run_bootstrap(store, hasher)
        admin = store.users.get_by_email(ADMIN_EMAIL)
        second = store.users.create({
            "email": "second@floe.io",
            "password_hash": hasher.hash_sync("Second1pass"),
            "role_id": admin.role_id,
            "active": True,
        })
        store.users.soft_delete(admin.id)

        run_bootstrap(store, hasher)

        assert store.users.get_by_email(ADMIN_EMAIL) is None
        assert len(store.users.rows) == 2
        assert store.users.get_by_id(second.id) is not None
        assert "was deleted" in caplog.text

    def test_store_failure_propagates(self, store, hasher):
        store.roles.get_by_name = MagicMock(side_effect=StoreError())
        with pytest.raises(StoreError):
            run_bootstrap(store, hasher)


class TestResetAdminUser:
    def test_resets_password_and_reactivates(self, store, hasher):
        run_bootstrap(store, hasher)
        admin = store.users.get_by_email(ADMIN_EMAIL)
        store.users.update(admin.id, {"active": False})

        reset_admin_user(store.users, hasher, ADMIN_EMAIL, "NewAdmin1")

        admin = store.users.get_by_email(ADMIN_EMAIL)
        assert admin.active is True
        assert hasher.verify_sync("NewAdmin1", admin.password_hash)
        assert not hasher.verify_sync(ADMIN_PASSWORD, admin.password_hash)

    def test_missing_admin(self, store, hasher):
        with pytest.raises(UserNotFoundError):
            reset_admin_user(store.users, hasher, ADMIN_EMAIL, "NewAdmin1")
