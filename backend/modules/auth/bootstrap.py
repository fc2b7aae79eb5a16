"""
Startup bootstrap for roles, the admin account and the default workspace.

Both functions are synchronous and meant to run once, off the event
loop, before the API starts serving requests. Running them again is
safe: every object is looked up before it is created.
"""

import logging

from shared.models import RoleName
from modules.users.interfaces import IUserRepository, IRoleRepository
from modules.users.exceptions import UserNotFoundError
from modules.users.models import normalize_email
from modules.workspaces.interfaces import IWorkspaceRepository, IMembershipRepository

from .passwords import PasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE = {
    "name": "Default",
    "slug": "default",
    "description": "Default workspace",
}


def ensure_admin_exists(
    roles: IRoleRepository,
    users: IUserRepository,
    workspaces: IWorkspaceRepository,
    memberships: IMembershipRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
) -> None:
    """
    Make sure the fixed roles, an admin user, the default workspace and
    the admin's membership of it all exist.

    Raises:
        StoreError: If the store is unreachable. Startup should abort.
    """
    role_ids: dict[RoleName, int] = {}
    for name in RoleName:
        role = roles.get_by_name(name)
        if role is None:
            role = roles.create(name, name.description)
            logger.info(f"Created role '{name.value}'")
        role_ids[name] = role.id

    email = normalize_email(email)
    admin = users.get_by_email(email)
    if admin is None and users.email_exists(email):
        # Deleted users keep their email reserved
        logger.warning(
            f"Admin user {email} was deleted; not recreating it. "
            "Set FLOE_ADMIN_EMAIL to another address to bootstrap a new admin."
        )
    elif admin is None:
        admin = users.create({
            "email": email,
            "password_hash": hasher.hash_sync(password),
            "first_name": "Admin",
            "last_name": "User",
            "role_id": role_ids[RoleName.ADMIN],
            "active": True,
        })
        logger.info(f"Created admin user {email}")

    workspace = workspaces.get_by_slug(DEFAULT_WORKSPACE["slug"])
    if workspace is None:
        workspace = workspaces.create(dict(DEFAULT_WORKSPACE))
        logger.info("Created default workspace")

    if admin is not None and not memberships.is_member(admin.id, workspace.id):
        memberships.add(admin.id, workspace.id)
        logger.info(f"Added {email} to the default workspace")


def reset_admin_user(
    users: IUserRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
) -> None:
    """
    Set the admin's password to ``password`` and reactivate the account.

    Raises:
        UserNotFoundError: If no user has ``email``.
    """
    email = normalize_email(email)
    admin = users.get_by_email(email)
    if admin is None:
        raise UserNotFoundError(email)

    users.update(admin.id, {
        "password_hash": hasher.hash_sync(password),
        "active": True,
    })
    logger.info(f"Reset credentials for admin user {email}")
