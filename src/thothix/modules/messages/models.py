"""Message database models."""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from thothix.core.database.base import Base, IDMixin, TimestampMixin


class Message(Base, IDMixin, TimestampMixin):
    """A chat message.

    Exactly one of ``channel_id`` and ``recipient_id`` is set: channel
    messages belong to a channel, direct messages to a recipient.
    """

    __tablename__ = "messages"

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    channel_id: Mapped[str | None] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    recipient_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
