"""Pydantic schemas for project operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = ""
    description: str | None = None


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Omitted fields are left unchanged."""

    name: str | None = None
    description: str | None = None


class ProjectMemberAdd(BaseModel):
    """Schema for adding a user to a project."""

    user_id: str = ""


class ProjectResponse(BaseModel):
    """Schema for project response data."""

    id: str
    name: str
    description: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProjectMemberResponse(BaseModel):
    """Schema for a project membership."""

    id: str
    project_id: str
    user_id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
