"""Role catalog: the static role → permission table and role hierarchy.

Roles form a total preorder ADMIN ≥ MANAGER ≥ USER ≥ EXTERNAL that is used
only for coarse minimum-role gates. Permission sets are independent of the
ranking: a higher rank does not imply a superset of permissions.

The table is built once at process start and never changes at runtime.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class Role(StrEnum):
    """System role assigned to every identity."""

    ADMIN = "admin"  # Can manage everything
    MANAGER = "manager"  # Can manage everything except users
    USER = "user"  # Assigned projects/channels, 1:1 chats
    EXTERNAL = "external"  # Public channels only


class Permission(StrEnum):
    """Checkable capability, named ``<resource>:<action>``."""

    USER_MANAGE = "user:manage"

    PROJECT_CREATE = "project:create"
    PROJECT_READ = "project:read"
    PROJECT_UPDATE = "project:update"
    PROJECT_DELETE = "project:delete"
    PROJECT_MANAGE = "project:manage"

    CHANNEL_CREATE = "channel:create"
    CHANNEL_READ = "channel:read"
    CHANNEL_UPDATE = "channel:update"
    CHANNEL_DELETE = "channel:delete"
    CHANNEL_MANAGE = "channel:manage"
    CHANNEL_READ_ASSIGNED = "channel:read_assigned"

    MESSAGE_CREATE = "message:create"
    MESSAGE_READ = "message:read"
    MESSAGE_UPDATE = "message:update"
    MESSAGE_DELETE = "message:delete"

    DM_CREATE = "dm:create"

    FILE_UPLOAD = "file:upload"
    FILE_READ = "file:read"
    FILE_DELETE = "file:delete"

    @property
    def resource(self) -> str:
        """The resource part of the permission name (e.g. "channel")."""
        return self.value.split(":", 1)[0]

    @property
    def action(self) -> str:
        """The action part of the permission name (e.g. "read")."""
        return self.value.split(":", 1)[1]


class ResourceType(StrEnum):
    """Resource kinds that refine a permission check."""

    PROJECT = "project"
    CHANNEL = "channel"


@dataclass(frozen=True, slots=True)
class ResourceScope:
    """The specific project or channel a permission check applies to."""

    type: ResourceType
    id: str

    @classmethod
    def project(cls, project_id: str) -> "ResourceScope":
        return cls(ResourceType.PROJECT, project_id)

    @classmethod
    def channel(cls, channel_id: str) -> "ResourceScope":
        return cls(ResourceType.CHANNEL, channel_id)


ROLE_RANKS: Mapping[Role, int] = MappingProxyType(
    {
        Role.EXTERNAL: 0,
        Role.USER: 1,
        Role.MANAGER: 2,
        Role.ADMIN: 3,
    }
)

# Roles that bypass membership checks on projects and channels
ELEVATED_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER})

_USER_PERMISSIONS = frozenset(
    {
        Permission.PROJECT_READ,  # only projects they are assigned to
        Permission.CHANNEL_READ,
        Permission.CHANNEL_READ_ASSIGNED,
        Permission.MESSAGE_CREATE,
        Permission.MESSAGE_READ,
        Permission.MESSAGE_UPDATE,
        Permission.DM_CREATE,
        Permission.FILE_UPLOAD,
        Permission.FILE_READ,
    }
)

_EXTERNAL_PERMISSIONS = frozenset(
    {
        Permission.CHANNEL_READ,  # public channels only
        Permission.MESSAGE_CREATE,
        Permission.MESSAGE_READ,
        Permission.FILE_READ,
    }
)


def default_role_permissions(
    *, external_file_upload: bool = False
) -> dict[Role, frozenset[Permission]]:
    """Build the standard role → permission table.

    Args:
        external_file_upload: Also grant file uploads to external users

    Returns:
        A new mapping with one frozen permission set per role
    """
    external = _EXTERNAL_PERMISSIONS
    if external_file_upload:
        external = external | {Permission.FILE_UPLOAD}

    return {
        Role.ADMIN: frozenset(Permission),
        Role.MANAGER: frozenset(Permission) - {Permission.USER_MANAGE},
        Role.USER: _USER_PERMISSIONS,
        Role.EXTERNAL: external,
    }


class RoleCatalog:
    """Immutable role → permission table with hierarchy ranking.

    Usage:
        catalog = RoleCatalog.default()
        catalog.has_permission(Role.USER, Permission.CHANNEL_READ)  # True
        catalog.meets_minimum_role(Role.MANAGER, Role.USER)  # True
    """

    __slots__ = ("_permissions",)

    def __init__(
        self, role_permissions: Mapping[Role, Iterable[Permission]] | None = None
    ) -> None:
        table = role_permissions if role_permissions is not None else default_role_permissions()
        self._permissions: Mapping[Role, frozenset[Permission]] = MappingProxyType(
            {Role(role): frozenset(perms) for role, perms in table.items()}
        )

    @classmethod
    def default(cls, *, external_file_upload: bool = False) -> "RoleCatalog":
        """Catalog with the standard permission table."""
        return cls(default_role_permissions(external_file_upload=external_file_upload))

    @property
    def roles(self) -> tuple[Role, ...]:
        """All roles, highest rank first."""
        return tuple(sorted(Role, key=self.rank_of, reverse=True))

    def has_permission(self, role: Role, permission: Permission) -> bool:
        """Check whether ``role`` carries ``permission``."""
        return permission in self._permissions.get(role, frozenset())

    def permissions_for(self, role: Role) -> frozenset[Permission]:
        """All permissions carried by ``role``."""
        return self._permissions.get(role, frozenset())

    @staticmethod
    def rank_of(role: Role) -> int:
        """Hierarchy rank of ``role`` (EXTERNAL=0 ... ADMIN=3)."""
        return ROLE_RANKS[role]

    def meets_minimum_role(self, actual: Role, required: Role) -> bool:
        """Check whether ``actual`` ranks at least as high as ``required``."""
        return self.rank_of(actual) >= self.rank_of(required)
