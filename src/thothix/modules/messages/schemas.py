"""Pydantic schemas for message operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageCreate(BaseModel):
    """Schema for posting a message to a channel."""

    content: str = ""


class DirectMessageCreate(BaseModel):
    """Schema for sending a direct message."""

    recipient_id: str = ""
    content: str = ""


class MessageResponse(BaseModel):
    """Schema for message response data."""

    id: str
    content: str
    sender_id: str
    channel_id: str | None = None
    recipient_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageListResponse(BaseModel):
    """Schema for a page of channel messages, newest first."""

    items: list[MessageResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
