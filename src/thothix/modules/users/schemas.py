"""Pydantic schemas for user operations.

Request schemas only describe shape. Business rules (required fields,
email format, uniqueness) are checked by the service and reported as
structured errors.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from thothix.core.permissions import Role


class UserCreate(BaseModel):
    """Schema for creating a user.

    ``id`` is the identity-provider subject; one is generated when omitted.
    """

    id: str | None = None
    email: str = ""
    name: str = ""
    username: str | None = None
    avatar_url: str | None = None


class UserUpdate(BaseModel):
    """Schema for updating user data."""

    email: str | None = None
    name: str | None = None
    username: str | None = None
    avatar_url: str | None = None


class RoleAssignment(BaseModel):
    """Schema for changing a user's system role."""

    role: str


class UserResponse(BaseModel):
    """Schema for user response data."""

    id: str
    email: str
    name: str
    username: str | None = None
    avatar_url: str | None = None
    system_role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    """Schema for listing users."""

    items: list[UserResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
