"""Message repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from thothix.api.dependencies import DBSession
from thothix.modules.messages.models import Message


class MessageRepository:
    """Repository for Message database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def create(self, message: Message) -> Message:
        """Create a new message."""
        self.session.add(message)
        self.session.flush()
        self.session.refresh(message)
        return message

    def list_for_channel(
        self, channel_id: str, page: int = 1, per_page: int = 50
    ) -> tuple[list[Message], int]:
        """List a channel's messages with pagination, newest first.

        Returns:
            Tuple of (messages list, total count)
        """
        total = (
            self.session.scalar(
                select(func.count())
                .select_from(Message)
                .where(Message.channel_id == channel_id)
            )
            or 0
        )

        offset = (page - 1) * per_page
        stmt = (
            select(Message)
            .where(Message.channel_id == channel_id)
            .order_by(Message.created_at.desc(), Message.id)
            .offset(offset)
            .limit(per_page)
        )
        messages = list(self.session.scalars(stmt).all())

        return messages, total


# Type alias for dependency injection
MessageRepo = Annotated[MessageRepository, Depends(MessageRepository)]
