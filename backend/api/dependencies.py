"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests build a container around in-memory repositories and install it
with set_container().
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

from shared.config import Settings, get_settings, resolve_jwt_secret

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IRefreshTokenRepository, ISessionManager
    from modules.auth.passwords import PasswordHasher
    from modules.auth.policy import AccessPolicy
    from modules.auth.tokens import TokenSigner
    from modules.users.interfaces import IUserRepository, IRoleRepository, IUserService
    from modules.workspaces.interfaces import (
        IWorkspaceRepository,
        IMembershipRepository,
        IWorkspaceService,
    )


class ServiceContainer:
    """
    Container for all service instances.

    Components are created lazily on first access and cached as
    singletons within the container. Any component can be supplied up
    front as a keyword argument (for example ``user_repository=...``),
    which is how tests swap in fakes.
    """

    _COMPONENTS = (
        "db",
        "user_repository",
        "role_repository",
        "workspace_repository",
        "membership_repository",
        "refresh_token_repository",
        "hasher",
        "signer",
        "policy",
        "sessions",
        "users",
        "workspaces",
    )

    def __init__(self, settings: Optional[Settings] = None, **overrides: Any) -> None:
        unknown = set(overrides) - set(self._COMPONENTS)
        if unknown:
            raise TypeError(f"Unknown container components: {sorted(unknown)}")
        self._settings = settings
        self._overrides = overrides
        self._instances: dict[str, Any] = dict(overrides)

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _get(self, name: str, factory) -> Any:
        if name not in self._instances:
            self._instances[name] = factory()
        return self._instances[name]

    # -------------------------------------------------------------------------
    # Store
    # -------------------------------------------------------------------------

    @property
    def db(self) -> "Client":
        from shared.database import get_supabase_client
        return self._get("db", get_supabase_client)

    @property
    def user_repository(self) -> "IUserRepository":
        from modules.users.repository import UserRepository
        return self._get("user_repository", lambda: UserRepository(self.db))

    @property
    def role_repository(self) -> "IRoleRepository":
        from modules.users.repository import RoleRepository
        return self._get("role_repository", lambda: RoleRepository(self.db))

    @property
    def workspace_repository(self) -> "IWorkspaceRepository":
        from modules.workspaces.repository import WorkspaceRepository
        return self._get("workspace_repository", lambda: WorkspaceRepository(self.db))

    @property
    def membership_repository(self) -> "IMembershipRepository":
        from modules.workspaces.repository import MembershipRepository
        return self._get("membership_repository", lambda: MembershipRepository(self.db))

    @property
    def refresh_token_repository(self) -> "IRefreshTokenRepository":
        from modules.auth.repository import RefreshTokenRepository
        return self._get(
            "refresh_token_repository", lambda: RefreshTokenRepository(self.db)
        )

    # -------------------------------------------------------------------------
    # Auth components
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> "PasswordHasher":
        from modules.auth.passwords import PasswordHasher
        return self._get("hasher", lambda: PasswordHasher(self.settings.bcrypt_rounds))

    @property
    def signer(self) -> "TokenSigner":
        """The token signer. The signing secret is resolved exactly once here."""
        from modules.auth.tokens import TokenSigner
        return self._get("signer", lambda: TokenSigner(
            secret=resolve_jwt_secret(self.settings),
            access_ttl=timedelta(seconds=self.settings.access_token_expiry),
            algorithm=self.settings.jwt_algorithm,
        ))

    @property
    def policy(self) -> "AccessPolicy":
        from modules.auth.policy import AccessPolicy
        return self._get("policy", lambda: AccessPolicy(self.membership_repository))

    @property
    def sessions(self) -> "ISessionManager":
        from modules.auth.service import SessionManager
        return self._get("sessions", lambda: SessionManager(
            users=self.user_repository,
            refresh_tokens=self.refresh_token_repository,
            workspaces=self.workspace_repository,
            hasher=self.hasher,
            signer=self.signer,
            policy=self.policy,
            refresh_ttl=timedelta(seconds=self.settings.refresh_token_expiry),
            rotate_refresh_tokens=self.settings.rotate_refresh_tokens,
        ))

    # -------------------------------------------------------------------------
    # Feature services
    # -------------------------------------------------------------------------

    @property
    def users(self) -> "IUserService":
        from modules.users.service import UserService
        return self._get("users", lambda: UserService(
            users=self.user_repository,
            roles=self.role_repository,
            memberships=self.membership_repository,
            hasher=self.hasher,
            sessions=self.sessions,
            password_min_length=self.settings.password_min_length,
        ))

    @property
    def workspaces(self) -> "IWorkspaceService":
        from modules.workspaces.service import WorkspaceService
        return self._get("workspaces", lambda: WorkspaceService(
            workspaces=self.workspace_repository,
            memberships=self.membership_repository,
            users=self.user_repository,
        ))

    # -------------------------------------------------------------------------
    # Startup tasks
    # -------------------------------------------------------------------------

    def bootstrap(self) -> None:
        """Create the roles, admin user and default workspace if missing."""
        from modules.auth.bootstrap import ensure_admin_exists
        ensure_admin_exists(
            roles=self.role_repository,
            users=self.user_repository,
            workspaces=self.workspace_repository,
            memberships=self.membership_repository,
            hasher=self.hasher,
            email=self.settings.admin_email,
            password=self.settings.admin_password,
        )

    def reset_admin(self) -> None:
        from modules.auth.bootstrap import reset_admin_user
        reset_admin_user(
            users=self.user_repository,
            hasher=self.hasher,
            email=self.settings.admin_email,
            password=self.settings.admin_password,
        )

    def reset(self) -> None:
        """
        Drop every cached component except the ones passed in.

        This is primarily for testing.
        """
        self._instances = dict(self._overrides)


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container. Used by tests."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_manager() -> "ISessionManager":
    """FastAPI dependency for the session manager."""
    return get_container().sessions


def get_access_policy() -> "AccessPolicy":
    """FastAPI dependency for the access policy."""
    return get_container().policy


def get_user_service() -> "IUserService":
    """FastAPI dependency for the user service."""
    return get_container().users


def get_workspace_service() -> "IWorkspaceService":
    """FastAPI dependency for the workspace service."""
    return get_container().workspaces
