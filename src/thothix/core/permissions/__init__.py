"""Authorization: role catalog, permission evaluator and resource resolvers."""

from thothix.core.permissions.catalog import (
    ELEVATED_ROLES,
    Permission,
    ResourceScope,
    ResourceType,
    Role,
    RoleCatalog,
    default_role_permissions,
)
from thothix.core.permissions.decisions import AccessDecision, DenialReason, JoinOutcome
from thothix.core.permissions.evaluator import PermissionEvaluator
from thothix.core.permissions.providers import (
    ChannelRef,
    MembershipExistsError,
    MembershipStore,
    RoleNotFoundError,
    RoleProvider,
)
from thothix.core.permissions.resolvers import (
    ChannelAccessResolver,
    ProjectAccessResolver,
)


__all__ = [
    "ELEVATED_ROLES",
    "AccessDecision",
    "ChannelAccessResolver",
    "ChannelRef",
    "DenialReason",
    "JoinOutcome",
    "MembershipExistsError",
    "MembershipStore",
    "Permission",
    "PermissionEvaluator",
    "ProjectAccessResolver",
    "ResourceScope",
    "ResourceType",
    "Role",
    "RoleCatalog",
    "RoleNotFoundError",
    "RoleProvider",
    "default_role_permissions",
]
