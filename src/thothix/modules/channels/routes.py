"""Channel API routes."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from thothix.api.dependencies import CurrentIdentity
from thothix.core.errors import respond
from thothix.modules.channels.schemas import ChannelCreate
from thothix.modules.channels.services import ChannelSvc


router = APIRouter(prefix="/channels", tags=["channels"])


@router.get(
    "",
    summary="List channels",
    description=(
        "Channels the caller may read: all for admins and managers, public ones for "
        "external users, public ones plus memberships for everybody else."
    ),
)
def list_channels(
    request: Request,
    service: ChannelSvc,
    identity: CurrentIdentity,
    project_id: Annotated[str | None, Query()] = None,
) -> JSONResponse:
    """List readable channels."""
    return respond(service.list_channels(identity, project_id), request)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create channel",
    description="Requires channel:create and access to the target project.",
)
def create_channel(
    data: ChannelCreate,
    request: Request,
    service: ChannelSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Create a channel."""
    return respond(
        service.create_channel(identity, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )


@router.get(
    "/{channel_id}",
    summary="Get channel",
    description="Public channels are readable by every role; private ones by members and elevated roles.",
)
def get_channel(
    channel_id: str,
    request: Request,
    service: ChannelSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Get a channel."""
    return respond(service.get_channel(identity, channel_id), request)


@router.post(
    "/{channel_id}/join",
    status_code=status.HTTP_201_CREATED,
    summary="Join channel",
    description="Join a public channel. Private channels are invite-only except for admins and managers.",
)
def join_channel(
    channel_id: str,
    request: Request,
    service: ChannelSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Join a channel."""
    return respond(
        service.join_channel(identity, channel_id),
        request,
        success_status=status.HTTP_201_CREATED,
    )
