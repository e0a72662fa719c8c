"""Project API routes."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from thothix.api.dependencies import CurrentIdentity
from thothix.core.errors import respond
from thothix.modules.projects.schemas import ProjectCreate, ProjectMemberAdd, ProjectUpdate
from thothix.modules.projects.services import ProjectSvc


router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    summary="List projects",
    description="Projects the caller may read: all of them for admins and managers.",
)
def list_projects(request: Request, service: ProjectSvc, identity: CurrentIdentity) -> JSONResponse:
    """List readable projects."""
    return respond(service.list_projects(identity), request)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Requires project:create. The creator becomes a member.",
)
def create_project(
    data: ProjectCreate,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Create a project."""
    return respond(
        service.create_project(identity, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{project_id}", summary="Get project")
def get_project(
    project_id: str,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Get a project."""
    return respond(service.get_project(identity, project_id), request)


@router.post(
    "/{project_id}/members",
    status_code=status.HTTP_201_CREATED,
    summary="Add project member",
    description="Requires project:manage on the project.",
)
def add_member(
    project_id: str,
    data: ProjectMemberAdd,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Add a user to a project."""
    return respond(
        service.add_member(identity, project_id, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )


@router.delete(
    "/{project_id}/members/{user_id}",
    summary="Remove project member",
    description="Requires project:manage on the project.",
)
def remove_member(
    project_id: str,
    user_id: str,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Remove a user from a project."""
    return respond(
        service.remove_member(identity, project_id, user_id),
        request,
        serializer=lambda message: {"message": message},
    )


@router.patch(
    "/{project_id}",
    summary="Update project",
    description="Requires project:update on the project.",
)
def update_project(
    project_id: str,
    data: ProjectUpdate,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Update a project."""
    return respond(service.update_project(identity, project_id, data), request)


@router.delete(
    "/{project_id}",
    summary="Delete project",
    description="Requires project:delete. Removes the project's channels, messages and memberships.",
)
def delete_project(
    project_id: str,
    request: Request,
    service: ProjectSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Delete a project."""
    return respond(
        service.delete_project(identity, project_id),
        request,
        serializer=lambda message: {"message": message},
    )
