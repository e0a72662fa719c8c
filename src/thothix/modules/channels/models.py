"""Channel database models.

There is no visibility column: a channel is private exactly when it has
at least one ``ChannelMember`` row.
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from thothix.core.constants import MAX_NAME_LENGTH
from thothix.core.database.base import Base, IDMixin, TimestampMixin


class Channel(Base, IDMixin, TimestampMixin):
    """A chat channel belonging to a project."""

    __tablename__ = "channels"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )


class ChannelMember(Base, IDMixin, TimestampMixin):
    """Membership of a user in a channel."""

    __tablename__ = "channel_members"
    __table_args__ = (
        UniqueConstraint("channel_id", "user_id", name="uq_channel_member"),
    )

    channel_id: Mapped[str] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
