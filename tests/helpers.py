"""Helpers shared by the database-backed tests."""

from sqlalchemy.orm import Session

from thothix.core.constants import IDENTITY_HEADER
from thothix.core.permissions import Role
from thothix.modules.channels.models import ChannelMember
from thothix.modules.projects.models import ProjectMember
from thothix.modules.users.models import User


def as_identity(identity_id: str) -> dict[str, str]:
    """Request headers carrying the caller identity."""
    return {IDENTITY_HEADER: identity_id}


def make_user(db: Session, user_id: str, role: Role) -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@example.com",
        name=user_id.title(),
        system_role=role,
    )
    db.add(user)
    db.flush()
    return user


def add_project_member(db: Session, project_id: str, user_id: str) -> None:
    db.add(ProjectMember(project_id=project_id, user_id=user_id))
    db.flush()


def add_channel_member(db: Session, channel_id: str, user_id: str) -> None:
    db.add(ChannelMember(channel_id=channel_id, user_id=user_id))
    db.flush()
