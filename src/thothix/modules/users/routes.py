"""User API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from thothix.api.dependencies import CurrentIdentity, require_role
from thothix.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from thothix.core.errors import respond
from thothix.core.permissions import Role
from thothix.modules.users.schemas import RoleAssignment, UserCreate, UserUpdate
from thothix.modules.users.services import UserSvc


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    summary="List users",
    description="Paginated list of users. page >= 1, 1 <= per_page <= 100.",
)
def list_users(
    request: Request,
    service: UserSvc,
    _identity: CurrentIdentity,
    page: Annotated[int, Query()] = DEFAULT_PAGE,
    per_page: Annotated[int, Query()] = DEFAULT_PAGE_SIZE,
) -> JSONResponse:
    """List users."""
    return respond(service.list_users(page, per_page), request)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Registers a user synchronized from the identity provider. Requires user:manage.",
)
def create_user(
    data: UserCreate,
    request: Request,
    service: UserSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Create a user."""
    return respond(
        service.create_user(identity, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )


@router.get(
    "/me",
    summary="Get current user",
)
def get_me(request: Request, service: UserSvc, identity: CurrentIdentity) -> JSONResponse:
    """Get the calling user."""
    return respond(service.get_user(identity), request)


@router.get(
    "/{user_id}",
    summary="Get user by ID",
)
def get_user(
    user_id: str,
    request: Request,
    service: UserSvc,
    _identity: CurrentIdentity,
) -> JSONResponse:
    """Get a user by ID."""
    return respond(service.get_user(user_id), request)


@router.patch(
    "/{user_id}",
    summary="Update user",
    description="Users may update their own profile; other profiles require user:manage.",
)
def update_user(
    user_id: str,
    data: UserUpdate,
    request: Request,
    service: UserSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Update a user."""
    return respond(service.update_user(identity, user_id, data), request)


@router.delete(
    "/{user_id}",
    summary="Delete user",
    description="Requires user:manage.",
)
def delete_user(
    user_id: str,
    request: Request,
    service: UserSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Delete a user."""
    return respond(
        service.delete_user(identity, user_id),
        request,
        serializer=lambda message: {"message": message},
    )


@router.put(
    "/{user_id}/role",
    summary="Assign system role",
    description="Changes a user's system role. Admin only.",
)
def assign_role(
    user_id: str,
    data: RoleAssignment,
    request: Request,
    service: UserSvc,
    _admin: Annotated[str, Depends(require_role(Role.ADMIN))],
) -> JSONResponse:
    """Assign a system role to a user."""
    return respond(service.assign_role(user_id, data), request)
