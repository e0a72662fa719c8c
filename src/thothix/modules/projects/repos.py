"""Project repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, select

from thothix.api.dependencies import DBSession
from thothix.modules.channels.models import Channel, ChannelMember
from thothix.modules.messages.models import Message
from thothix.modules.projects.models import Project, ProjectMember


class ProjectRepository:
    """Repository for Project and ProjectMember database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def create(self, project: Project) -> Project:
        """Create a new project."""
        self.session.add(project)
        self.session.flush()
        self.session.refresh(project)
        return project

    def get_by_id(self, project_id: str) -> Project | None:
        """Get a project by ID."""
        return self.session.get(Project, project_id)

    def list_all(self) -> list[Project]:
        """All projects, newest first."""
        stmt = select(Project).order_by(Project.created_at.desc(), Project.id)
        return list(self.session.scalars(stmt).all())

    def list_for_member(self, user_id: str) -> list[Project]:
        """Projects ``user_id`` is a member of, newest first."""
        stmt = (
            select(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .where(ProjectMember.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id)
        )
        return list(self.session.scalars(stmt).all())

    def get_member(self, project_id: str, user_id: str) -> ProjectMember | None:
        """Get a project membership, if any."""
        stmt = select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
        return self.session.scalars(stmt).first()

    def add_member(self, project_id: str, user_id: str) -> ProjectMember:
        """Create a project membership."""
        member = ProjectMember(project_id=project_id, user_id=user_id)
        self.session.add(member)
        self.session.flush()
        self.session.refresh(member)
        return member

    def remove_member(self, member: ProjectMember) -> None:
        """Delete a project membership."""
        self.session.delete(member)
        self.session.flush()

    def update(self, project: Project) -> Project:
        """Persist changes to a project."""
        self.session.add(project)
        self.session.flush()
        self.session.refresh(project)
        return project

    def delete(self, project: Project) -> None:
        """Delete a project with its channels, messages and memberships."""
        channel_ids = select(Channel.id).where(Channel.project_id == project.id)
        self.session.execute(delete(Message).where(Message.channel_id.in_(channel_ids)))
        self.session.execute(
            delete(ChannelMember).where(ChannelMember.channel_id.in_(channel_ids))
        )
        self.session.execute(delete(Channel).where(Channel.project_id == project.id))
        self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project.id)
        )
        self.session.delete(project)
        self.session.flush()


# Type alias for dependency injection
ProjectRepo = Annotated[ProjectRepository, Depends(ProjectRepository)]
