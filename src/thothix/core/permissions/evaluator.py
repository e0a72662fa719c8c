"""Permission evaluation.

``PermissionEvaluator.authorize`` works in two layers: a role-level gate
(does the caller's role carry the permission at all?) followed, for
project- and channel-scoped checks, by the matching resource resolver.
Most permissions are role-only; projects and channels add membership and
visibility rules on top.
"""

import structlog

from thothix.core.permissions.catalog import (
    Permission,
    ResourceScope,
    ResourceType,
    Role,
    RoleCatalog,
)
from thothix.core.permissions.decisions import AccessDecision, DenialReason
from thothix.core.permissions.providers import (
    MembershipStore,
    RoleNotFoundError,
    RoleProvider,
)
from thothix.core.permissions.resolvers import (
    ChannelAccessResolver,
    ProjectAccessResolver,
)


logger = structlog.get_logger()


class PermissionEvaluator:
    """Decides whether an identity may perform an action on a resource.

    Unknown identities are denied with ``LOOKUP_FAILED`` unless a
    ``fallback_role`` is configured, in which case they are evaluated as
    that role. Any other error raised by a collaborator propagates to the
    caller unchanged.
    """

    def __init__(
        self,
        catalog: RoleCatalog,
        roles: RoleProvider,
        store: MembershipStore,
        fallback_role: Role | None = None,
    ) -> None:
        self.catalog = catalog
        self.roles = roles
        self.store = store
        self.fallback_role = fallback_role
        self.projects = ProjectAccessResolver(store)
        self.channels = ChannelAccessResolver(store, self.projects)

    def resolve_role(self, identity_id: str) -> Role | None:
        """Look up the caller's role.

        Returns:
            The role, the configured fallback for unknown identities,
            or None if the identity is unknown and there is no fallback
        """
        try:
            return self.roles.get_role(identity_id)
        except RoleNotFoundError:
            if self.fallback_role is not None:
                logger.warning(
                    "role_lookup_fallback",
                    identity_id=identity_id,
                    fallback_role=str(self.fallback_role),
                )
            return self.fallback_role

    def authorize(
        self,
        identity_id: str | None,
        permission: Permission,
        scope: ResourceScope | None = None,
    ) -> AccessDecision:
        """Check whether ``identity_id`` holds ``permission`` on ``scope``.

        Args:
            identity_id: The caller; empty or None means unauthenticated
            permission: The permission required
            scope: The project or channel the check applies to, or None
                for a global permission

        Returns:
            The access decision, with a denial reason when denied
        """
        decision = self._authorize(identity_id, permission, scope)
        if not decision:
            logger.info(
                "authorization_denied",
                identity_id=identity_id,
                permission=str(permission),
                resource_type=str(scope.type) if scope else None,
                resource_id=scope.id if scope else None,
                reason=str(decision.reason),
            )
        return decision

    def _authorize(
        self,
        identity_id: str | None,
        permission: Permission,
        scope: ResourceScope | None,
    ) -> AccessDecision:
        if not identity_id:
            return AccessDecision.deny(DenialReason.NOT_AUTHENTICATED)

        role = self.resolve_role(identity_id)
        if role is None:
            return AccessDecision.deny(DenialReason.LOOKUP_FAILED)

        if not self.catalog.has_permission(role, permission):
            return AccessDecision.deny(DenialReason.ROLE_INSUFFICIENT)

        if scope is None:
            return AccessDecision.allow()
        if scope.type == ResourceType.CHANNEL:
            return self.channels.allow(identity_id, role, scope.id)
        return self.projects.allow(identity_id, role, scope.id)

    def require_role(self, identity_id: str | None, minimum: Role) -> AccessDecision:
        """Coarse gate: does the caller rank at least ``minimum``?"""
        if not identity_id:
            return AccessDecision.deny(DenialReason.NOT_AUTHENTICATED)

        role = self.resolve_role(identity_id)
        if role is None:
            return AccessDecision.deny(DenialReason.LOOKUP_FAILED)

        if self.catalog.meets_minimum_role(role, minimum):
            return AccessDecision.allow()

        logger.info(
            "authorization_denied",
            identity_id=identity_id,
            required_role=str(minimum),
            role=str(role),
            reason=str(DenialReason.ROLE_INSUFFICIENT),
        )
        return AccessDecision.deny(DenialReason.ROLE_INSUFFICIENT)
