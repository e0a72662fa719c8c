"""Project database models."""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from thothix.core.constants import MAX_ID_LENGTH, MAX_NAME_LENGTH
from thothix.core.database.base import Base, IDMixin, TimestampMixin


class Project(Base, IDMixin, TimestampMixin):
    """A project grouping channels and members."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    created_by: Mapped[str | None] = mapped_column(
        String(MAX_ID_LENGTH),
        nullable=True,
    )


class ProjectMember(Base, IDMixin, TimestampMixin):
    """Membership of a user in a project.

    For non-elevated roles, the existence of this row is what grants
    access to the project.
    """

    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_member"),
    )

    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
