"""Collaborator contracts consumed by the permission evaluator.

The evaluator never touches storage directly. It reads roles through a
``RoleProvider`` and membership through a ``MembershipStore``; the only
write it performs is ``create_channel_membership`` when an identity joins a
channel.
"""

from dataclasses import dataclass
from typing import Protocol

from thothix.core.permissions.catalog import Role


class RoleNotFoundError(LookupError):
    """Raised by a role provider when the identity is unknown."""

    def __init__(self, identity_id: str) -> None:
        self.identity_id = identity_id
        super().__init__(f"No role found for identity {identity_id!r}")


class MembershipExistsError(Exception):
    """Raised when creating a channel membership that already exists."""

    def __init__(self, identity_id: str, channel_id: str) -> None:
        self.identity_id = identity_id
        self.channel_id = channel_id
        super().__init__(
            f"Identity {identity_id!r} is already a member of channel {channel_id!r}"
        )


@dataclass(frozen=True, slots=True)
class ChannelRef:
    """Minimal channel facts needed for access decisions."""

    id: str
    project_id: str


class RoleProvider(Protocol):
    """Resolves the system role of an identity."""

    def get_role(self, identity_id: str) -> Role:
        """Return the role of ``identity_id``.

        Raises:
            RoleNotFoundError: If the identity is unknown
        """
        ...


class MembershipStore(Protocol):
    """Membership lookups for projects and channels."""

    def project_exists(self, project_id: str) -> bool: ...

    def is_project_member(self, identity_id: str, project_id: str) -> bool: ...

    def is_channel_member(self, identity_id: str, channel_id: str) -> bool: ...

    def count_channel_members(self, channel_id: str) -> int: ...

    def get_channel(self, channel_id: str) -> ChannelRef | None: ...

    def create_channel_membership(self, identity_id: str, channel_id: str) -> None:
        """Add ``identity_id`` to the channel.

        Raises:
            MembershipExistsError: If the membership already exists
        """
        ...
