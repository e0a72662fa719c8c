"""Pydantic schemas for channel operations."""

from datetime import datetime

from pydantic import BaseModel


class ChannelCreate(BaseModel):
    """Schema for creating a channel inside a project."""

    name: str = ""
    project_id: str = ""


class ChannelResponse(BaseModel):
    """Schema for channel response data.

    ``is_private`` is derived from membership at read time.
    """

    id: str
    name: str
    project_id: str
    is_private: bool
    member_count: int
    created_at: datetime | None = None


class ChannelJoinResponse(BaseModel):
    """Schema for a successful channel join."""

    channel_id: str
    user_id: str
    message: str
