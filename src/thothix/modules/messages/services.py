"""Message service for business logic.

Channel messages are authorized against the channel, so the same
visibility rules that govern reading a channel govern posting to and
reading from it. Direct messages only need the role-level ``dm:create``.
"""

import math
from typing import Annotated

from fastapi import Depends

from thothix.api.dependencies import Evaluator
from thothix.core.constants import MAX_MESSAGE_LENGTH, MAX_PAGE_SIZE
from thothix.core.outcome import (
    ErrorCode,
    Invalid,
    Response,
    StructuredError,
    Valid,
    Validation,
)
from thothix.core.permissions import (
    AccessDecision,
    DenialReason,
    Permission,
    ResourceScope,
)
from thothix.modules.messages.models import Message
from thothix.modules.messages.repos import MessageRepo
from thothix.modules.messages.schemas import (
    DirectMessageCreate,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
)
from thothix.modules.users.repos import UserRepo


def _field_error(field: str, message: str) -> StructuredError:
    return StructuredError.create(ErrorCode.VALIDATION_ERROR, message, field=field)


def _content_errors(content: str) -> list[StructuredError]:
    if not content.strip():
        return [_field_error("content", "Message content is required")]
    if len(content) > MAX_MESSAGE_LENGTH:
        return [
            _field_error(
                "content", f"Message content must be at most {MAX_MESSAGE_LENGTH} characters"
            )
        ]
    return []


def _channel_denial(decision: AccessDecision, channel_id: str) -> Invalid:
    if decision.reason == DenialReason.RESOURCE_NOT_FOUND:
        return Invalid(
            StructuredError.create(
                ErrorCode.CHANNEL_NOT_FOUND, "Channel not found", channel_id=channel_id
            )
        )
    return Invalid(decision.to_error(channel_id=channel_id))


class MessageService:
    """Service for channel and direct messages."""

    def __init__(self, repo: MessageRepo, users: UserRepo, evaluator: Evaluator) -> None:
        self.repo = repo
        self.users = users
        self.evaluator = evaluator

    def send_message(
        self, identity_id: str, channel_id: str, data: MessageCreate
    ) -> Response[MessageResponse]:
        """Post a message to a channel.

        Failures:
            VALIDATION_ERROR: empty or overlong content
            FORBIDDEN / UNAUTHORIZED: caller lacks ``message:create`` or
                may not access the channel
            CHANNEL_NOT_FOUND: no such channel
        """

        def produce() -> Validation[MessageResponse]:
            errors = _content_errors(data.content)
            if errors:
                return Invalid(*errors)

            decision = self.evaluator.authorize(
                identity_id, Permission.MESSAGE_CREATE, ResourceScope.channel(channel_id)
            )
            if not decision:
                return _channel_denial(decision, channel_id)

            message = self.repo.create(
                Message(content=data.content, sender_id=identity_id, channel_id=channel_id)
            )
            return Valid(MessageResponse.model_validate(message))

        return Response(produce)

    def list_messages(
        self, identity_id: str, channel_id: str, page: int, per_page: int
    ) -> Response[MessageListResponse]:
        """List a channel's messages page by page, newest first.

        Failures:
            VALIDATION_ERROR: page below 1 or per_page outside 1..100
            FORBIDDEN / UNAUTHORIZED: caller may not read the channel or
                its messages
            CHANNEL_NOT_FOUND: no such channel
        """

        def produce() -> Validation[MessageListResponse]:
            errors: list[StructuredError] = []
            if page < 1:
                errors.append(_field_error("page", "Page must be greater than 0"))
            if per_page < 1 or per_page > MAX_PAGE_SIZE:
                errors.append(
                    _field_error("per_page", f"Per page must be between 1 and {MAX_PAGE_SIZE}")
                )
            if errors:
                return Invalid(*errors)

            decision = self.evaluator.authorize(
                identity_id, Permission.CHANNEL_READ, ResourceScope.channel(channel_id)
            )
            if not decision:
                return _channel_denial(decision, channel_id)
            decision = self.evaluator.authorize(identity_id, Permission.MESSAGE_READ)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.MESSAGE_READ)))

            messages, total = self.repo.list_for_channel(channel_id, page, per_page)
            return Valid(
                MessageListResponse(
                    items=[MessageResponse.model_validate(m) for m in messages],
                    total=total,
                    page=page,
                    per_page=per_page,
                    total_pages=math.ceil(total / per_page) if total else 0,
                )
            )

        return Response(produce)

    def send_direct_message(
        self, identity_id: str, data: DirectMessageCreate
    ) -> Response[MessageResponse]:
        """Send a direct message to another user.

        Failures:
            VALIDATION_ERROR: missing recipient, empty content, or a
                message to oneself
            FORBIDDEN / UNAUTHORIZED: caller lacks ``dm:create``
            USER_NOT_FOUND: no such recipient
        """

        def produce() -> Validation[MessageResponse]:
            errors: list[StructuredError] = []
            if not data.recipient_id:
                errors.append(_field_error("recipient_id", "Recipient ID is required"))
            elif data.recipient_id == identity_id:
                errors.append(
                    _field_error("recipient_id", "Cannot send a direct message to yourself")
                )
            errors.extend(_content_errors(data.content))
            if errors:
                return Invalid(*errors)

            decision = self.evaluator.authorize(identity_id, Permission.DM_CREATE)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.DM_CREATE)))

            if self.users.get_by_id(data.recipient_id) is None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.USER_NOT_FOUND,
                        "Recipient not found",
                        user_id=data.recipient_id,
                    )
                )

            message = self.repo.create(
                Message(
                    content=data.content,
                    sender_id=identity_id,
                    recipient_id=data.recipient_id,
                )
            )
            return Valid(MessageResponse.model_validate(message))

        return Response(produce)


# Type alias for dependency injection
MessageSvc = Annotated[MessageService, Depends(MessageService)]
