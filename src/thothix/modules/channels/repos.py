"""Channel repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from thothix.api.dependencies import DBSession
from thothix.modules.channels.models import Channel, ChannelMember


class ChannelRepository:
    """Repository for Channel database operations.

    Membership writes go through ``SqlMembershipStore`` so that the
    visibility rule has a single source. The bulk reads here back the
    channel listing.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def create(self, channel: Channel) -> Channel:
        """Create a new channel."""
        self.session.add(channel)
        self.session.flush()
        self.session.refresh(channel)
        return channel

    def get_by_id(self, channel_id: str) -> Channel | None:
        """Get a channel by ID."""
        return self.session.get(Channel, channel_id)

    def list_with_member_counts(
        self, project_id: str | None = None
    ) -> list[tuple[Channel, int]]:
        """All channels with their member counts, oldest first.

        Args:
            project_id: Only channels of this project, when given
        """
        counts = (
            select(ChannelMember.channel_id, func.count().label("member_count"))
            .group_by(ChannelMember.channel_id)
            .subquery()
        )
        stmt = (
            select(Channel, func.coalesce(counts.c.member_count, 0))
            .outerjoin(counts, counts.c.channel_id == Channel.id)
            .order_by(Channel.created_at, Channel.id)
        )
        if project_id:
            stmt = stmt.where(Channel.project_id == project_id)
        return [(channel, count) for channel, count in self.session.execute(stmt).all()]

    def channel_ids_for_member(self, user_id: str) -> set[str]:
        """IDs of the channels ``user_id`` belongs to."""
        stmt = select(ChannelMember.channel_id).where(ChannelMember.user_id == user_id)
        return set(self.session.scalars(stmt).all())


# Type alias for dependency injection
ChannelRepo = Annotated[ChannelRepository, Depends(ChannelRepository)]
