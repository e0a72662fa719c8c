"""SQLAlchemy implementations of the role provider and membership store."""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thothix.core.permissions.catalog import Role
from thothix.core.permissions.providers import (
    ChannelRef,
    MembershipExistsError,
    RoleNotFoundError,
)
from thothix.modules.channels.models import Channel, ChannelMember
from thothix.modules.projects.models import Project, ProjectMember
from thothix.modules.users.models import User


class SqlRoleProvider:
    """Reads ``users.system_role``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_role(self, identity_id: str) -> Role:
        role = self.session.scalar(select(User.system_role).where(User.id == identity_id))
        if role is None:
            raise RoleNotFoundError(identity_id)
        return Role(role)


class SqlMembershipStore:
    """Project and channel membership backed by the membership tables."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def project_exists(self, project_id: str) -> bool:
        return self.session.get(Project, project_id) is not None

    def is_project_member(self, identity_id: str, project_id: str) -> bool:
        stmt = (
            select(ProjectMember.id)
            .where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == identity_id,
            )
            .limit(1)
        )
        return self.session.scalar(stmt) is not None

    def is_channel_member(self, identity_id: str, channel_id: str) -> bool:
        stmt = (
            select(ChannelMember.id)
            .where(
                ChannelMember.channel_id == channel_id,
                ChannelMember.user_id == identity_id,
            )
            .limit(1)
        )
        return self.session.scalar(stmt) is not None

    def count_channel_members(self, channel_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(ChannelMember)
            .where(ChannelMember.channel_id == channel_id)
        )
        return self.session.scalar(stmt) or 0

    def get_channel(self, channel_id: str) -> ChannelRef | None:
        channel = self.session.get(Channel, channel_id)
        if channel is None:
            return None
        return ChannelRef(id=channel.id, project_id=channel.project_id)

    def create_channel_membership(self, identity_id: str, channel_id: str) -> None:
        """Insert the membership row.

        A unique-constraint violation rolls back the current transaction
        and is reported as ``MembershipExistsError``.
        """
        self.session.add(ChannelMember(channel_id=channel_id, user_id=identity_id))
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise MembershipExistsError(identity_id, channel_id) from exc
