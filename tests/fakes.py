"""In-memory collaborators for kernel unit tests."""

from thothix.core.permissions import (
    ChannelRef,
    MembershipExistsError,
    Role,
    RoleNotFoundError,
)


class InMemoryRoles:
    """Role provider backed by a dict."""

    def __init__(self, roles: dict[str, Role] | None = None) -> None:
        self.roles = dict(roles or {})

    def get_role(self, identity_id: str) -> Role:
        try:
            return self.roles[identity_id]
        except KeyError:
            raise RoleNotFoundError(identity_id) from None


class BrokenRoles:
    """Role provider whose backend is down."""

    def get_role(self, identity_id: str) -> Role:
        raise ConnectionError("role store unavailable")


class InMemoryMembershipStore:
    """Membership store backed by sets.

    ``race_on_create`` simulates a concurrent join that inserted the row
    between the membership check and the insert.
    """

    def __init__(self) -> None:
        self.projects: set[str] = set()
        self.channels: dict[str, ChannelRef] = {}
        self.project_members: set[tuple[str, str]] = set()
        self.channel_members: set[tuple[str, str]] = set()
        self.race_on_create = False

    def add_project(self, project_id: str) -> None:
        self.projects.add(project_id)

    def add_channel(self, channel_id: str, project_id: str) -> None:
        self.projects.add(project_id)
        self.channels[channel_id] = ChannelRef(id=channel_id, project_id=project_id)

    def add_project_member(self, identity_id: str, project_id: str) -> None:
        self.projects.add(project_id)
        self.project_members.add((identity_id, project_id))

    def add_channel_member(self, identity_id: str, channel_id: str) -> None:
        self.channel_members.add((identity_id, channel_id))

    def project_exists(self, project_id: str) -> bool:
        return project_id in self.projects

    def is_project_member(self, identity_id: str, project_id: str) -> bool:
        return (identity_id, project_id) in self.project_members

    def is_channel_member(self, identity_id: str, channel_id: str) -> bool:
        return (identity_id, channel_id) in self.channel_members

    def count_channel_members(self, channel_id: str) -> int:
        return sum(1 for _, cid in self.channel_members if cid == channel_id)

    def get_channel(self, channel_id: str) -> ChannelRef | None:
        return self.channels.get(channel_id)

    def create_channel_membership(self, identity_id: str, channel_id: str) -> None:
        if self.race_on_create or (identity_id, channel_id) in self.channel_members:
            self.channel_members.add((identity_id, channel_id))
            raise MembershipExistsError(identity_id, channel_id)
        self.channel_members.add((identity_id, channel_id))
