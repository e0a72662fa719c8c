"""Message API routes."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from thothix.api.dependencies import CurrentIdentity
from thothix.core.constants import DEFAULT_MESSAGE_PAGE_SIZE, DEFAULT_PAGE
from thothix.core.errors import respond
from thothix.modules.messages.schemas import DirectMessageCreate, MessageCreate
from thothix.modules.messages.services import MessageSvc


router = APIRouter(tags=["messages"])


@router.get(
    "/channels/{channel_id}/messages",
    summary="List channel messages",
    description="Newest first. Requires read access to the channel.",
)
def list_messages(
    channel_id: str,
    request: Request,
    service: MessageSvc,
    identity: CurrentIdentity,
    page: Annotated[int, Query()] = DEFAULT_PAGE,
    per_page: Annotated[int, Query()] = DEFAULT_MESSAGE_PAGE_SIZE,
) -> JSONResponse:
    """List messages in a channel."""
    return respond(service.list_messages(identity, channel_id, page, per_page), request)


@router.post(
    "/channels/{channel_id}/messages",
    status_code=status.HTTP_201_CREATED,
    summary="Send channel message",
    description="Requires message:create and access to the channel.",
)
def send_message(
    channel_id: str,
    data: MessageCreate,
    request: Request,
    service: MessageSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Post a message to a channel."""
    return respond(
        service.send_message(identity, channel_id, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )


@router.post(
    "/messages/direct",
    status_code=status.HTTP_201_CREATED,
    summary="Send direct message",
    description="Requires dm:create. External users cannot send direct messages.",
)
def send_direct_message(
    data: DirectMessageCreate,
    request: Request,
    service: MessageSvc,
    identity: CurrentIdentity,
) -> JSONResponse:
    """Send a direct message."""
    return respond(
        service.send_direct_message(identity, data),
        request,
        success_status=status.HTTP_201_CREATED,
    )
