"""Resource access resolvers for projects and channels.

These refine a role-level permission with resource-specific rules.

Channel visibility is derived, never stored: a channel is private as soon as
it has at least one membership row. Joining an empty (public) channel is
therefore what makes it private for every later evaluation.
"""

import structlog

from thothix.core.outcome import ErrorCode
from thothix.core.permissions.catalog import ELEVATED_ROLES, Role
from thothix.core.permissions.decisions import AccessDecision, DenialReason, JoinOutcome
from thothix.core.permissions.providers import MembershipExistsError, MembershipStore


logger = structlog.get_logger()


class ProjectAccessResolver:
    """Project membership rules.

    Admins and managers see every existing project; everybody else needs a
    project membership.
    """

    def __init__(self, store: MembershipStore) -> None:
        self.store = store

    def allow(self, identity_id: str, role: Role, project_id: str) -> AccessDecision:
        if not self.store.project_exists(project_id):
            return AccessDecision.deny(DenialReason.RESOURCE_NOT_FOUND)
        if role in ELEVATED_ROLES:
            return AccessDecision.allow()
        if self.store.is_project_member(identity_id, project_id):
            return AccessDecision.allow()
        return AccessDecision.deny(DenialReason.NOT_MEMBER)


class ChannelAccessResolver:
    """Channel visibility and join rules."""

    def __init__(
        self,
        store: MembershipStore,
        projects: ProjectAccessResolver | None = None,
    ) -> None:
        self.store = store
        self.projects = projects or ProjectAccessResolver(store)

    def is_private(self, channel_id: str) -> bool:
        """A channel is private iff it has at least one member."""
        return self.store.count_channel_members(channel_id) > 0

    def allow(self, identity_id: str, role: Role, channel_id: str) -> AccessDecision:
        """Decide whether ``identity_id`` may access the channel.

        Args:
            identity_id: The caller
            role: The caller's resolved role
            channel_id: The channel being accessed

        Returns:
            RESOURCE_NOT_FOUND for an unknown channel. Otherwise allow for
            elevated roles and public channels; for private channels
            external users are denied and other roles need a channel
            membership
        """
        if self.store.get_channel(channel_id) is None:
            return AccessDecision.deny(DenialReason.RESOURCE_NOT_FOUND)

        if role in ELEVATED_ROLES:
            logger.debug(
                "elevated_channel_access",
                identity_id=identity_id,
                role=str(role),
                channel_id=channel_id,
            )
            return AccessDecision.allow()

        if not self.is_private(channel_id):
            return AccessDecision.allow()

        if role == Role.EXTERNAL:
            return AccessDecision.deny(DenialReason.ROLE_INSUFFICIENT)

        if self.store.is_channel_member(identity_id, channel_id):
            return AccessDecision.allow()
        return AccessDecision.deny(DenialReason.NOT_MEMBER)

    def join_channel(self, identity_id: str, role: Role, channel_id: str) -> JoinOutcome:
        """Add ``identity_id`` to the channel if the join rules allow it.

        Rules, in order:
        - an existing member is refused (no row is created);
        - a private channel is invite-only unless the caller is an admin or
          manager;
        - an external user may join a public channel;
        - a regular user needs access to the channel's project;
        - everybody else joins.

        Returns:
            ``JoinOutcome.joined()`` after the membership row was created,
            otherwise a denial with ALREADY_MEMBER,
            PRIVATE_CHANNEL_INVITE_ONLY, PROJECT_ACCESS_DENIED or
            CHANNEL_NOT_FOUND
        """
        channel = self.store.get_channel(channel_id)
        if channel is None:
            return JoinOutcome.denied(ErrorCode.CHANNEL_NOT_FOUND, "Channel not found")

        if self.store.is_channel_member(identity_id, channel_id):
            return JoinOutcome.denied(
                ErrorCode.ALREADY_MEMBER, "Already a member of this channel"
            )

        private = self.is_private(channel_id)

        if private and role not in ELEVATED_ROLES:
            return JoinOutcome.denied(
                ErrorCode.PRIVATE_CHANNEL_INVITE_ONLY,
                "Cannot join private channel without invitation",
            )

        if role == Role.USER and not self.projects.allow(
            identity_id, role, channel.project_id
        ):
            return JoinOutcome.denied(
                ErrorCode.PROJECT_ACCESS_DENIED, "Access denied to project"
            )

        try:
            self.store.create_channel_membership(identity_id, channel_id)
        except MembershipExistsError:
            return JoinOutcome.denied(
                ErrorCode.ALREADY_MEMBER, "Already a member of this channel"
            )

        logger.info(
            "channel_joined",
            identity_id=identity_id,
            role=str(role),
            channel_id=channel_id,
            was_private=private,
        )
        return JoinOutcome.joined()
