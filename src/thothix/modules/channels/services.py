"""Channel service for business logic."""

from typing import Annotated

from fastapi import Depends

from thothix.api.dependencies import Evaluator
from thothix.core.constants import MAX_NAME_LENGTH
from thothix.core.outcome import (
    ErrorCode,
    Invalid,
    Response,
    StructuredError,
    Valid,
    Validation,
)
from thothix.core.permissions import (
    ELEVATED_ROLES,
    AccessDecision,
    DenialReason,
    Permission,
    ResourceScope,
    Role,
)
from thothix.modules.channels.models import Channel
from thothix.modules.channels.repos import ChannelRepo
from thothix.modules.channels.schemas import (
    ChannelCreate,
    ChannelJoinResponse,
    ChannelResponse,
)
from thothix.modules.projects.repos import ProjectRepo


def _project_not_found(project_id: str) -> Invalid:
    return Invalid(
        StructuredError.create(
            ErrorCode.PROJECT_NOT_FOUND, "Project not found", project_id=project_id
        )
    )


def _channel_not_found(channel_id: str) -> Invalid:
    return Invalid(
        StructuredError.create(
            ErrorCode.CHANNEL_NOT_FOUND, "Channel not found", channel_id=channel_id
        )
    )


class ChannelService:
    """Service for channel operations."""

    def __init__(self, repo: ChannelRepo, projects: ProjectRepo, evaluator: Evaluator) -> None:
        self.repo = repo
        self.projects = projects
        self.evaluator = evaluator

    def _to_response(
        self, channel: Channel, member_count: int | None = None
    ) -> ChannelResponse:
        if member_count is None:
            member_count = self.evaluator.store.count_channel_members(channel.id)
        return ChannelResponse(
            id=channel.id,
            name=channel.name,
            project_id=channel.project_id,
            is_private=member_count > 0,
            member_count=member_count,
            created_at=channel.created_at,
        )

    def create_channel(
        self, identity_id: str, data: ChannelCreate
    ) -> Response[ChannelResponse]:
        """Create a channel in a project.

        New channels have no members and are therefore public.

        Failures:
            VALIDATION_ERROR: missing name or project ID
            FORBIDDEN / UNAUTHORIZED: caller lacks ``channel:create`` or
                access to the project
            PROJECT_NOT_FOUND: no such project
        """

        def produce() -> Validation[ChannelResponse]:
            name = data.name.strip()
            errors: list[StructuredError] = []
            if not name:
                errors.append(
                    StructuredError.create(
                        ErrorCode.VALIDATION_ERROR, "Channel name is required", field="name"
                    )
                )
            elif len(name) > MAX_NAME_LENGTH:
                errors.append(
                    StructuredError.create(
                        ErrorCode.VALIDATION_ERROR,
                        f"Channel name must be at most {MAX_NAME_LENGTH} characters",
                        field="name",
                    )
                )
            if not data.project_id:
                errors.append(
                    StructuredError.create(
                        ErrorCode.VALIDATION_ERROR, "Project ID is required", field="project_id"
                    )
                )
            if errors:
                return Invalid(*errors)

            decision = self.evaluator.authorize(
                identity_id,
                Permission.CHANNEL_CREATE,
                ResourceScope.project(data.project_id),
            )
            if not decision:
                if decision.reason == DenialReason.RESOURCE_NOT_FOUND:
                    return _project_not_found(data.project_id)
                return Invalid(decision.to_error(project_id=data.project_id))

            if self.projects.get_by_id(data.project_id) is None:
                return _project_not_found(data.project_id)

            channel = self.repo.create(Channel(name=name, project_id=data.project_id))
            return Valid(self._to_response(channel))

        return Response(produce)

    def get_channel(self, identity_id: str, channel_id: str) -> Response[ChannelResponse]:
        """Get a channel the caller may read.

        Failures:
            FORBIDDEN / UNAUTHORIZED: private channel the caller is not in
            CHANNEL_NOT_FOUND: no such channel
        """

        def produce() -> Validation[ChannelResponse]:
            decision = self.evaluator.authorize(
                identity_id, Permission.CHANNEL_READ, ResourceScope.channel(channel_id)
            )
            if not decision:
                if decision.reason == DenialReason.RESOURCE_NOT_FOUND:
                    return _channel_not_found(channel_id)
                return Invalid(decision.to_error(channel_id=channel_id))

            channel = self.repo.get_by_id(channel_id)
            if channel is None:
                return _channel_not_found(channel_id)
            return Valid(self._to_response(channel))

        return Response(produce)

    def list_channels(
        self, identity_id: str, project_id: str | None = None
    ) -> Response[list[ChannelResponse]]:
        """List the channels the caller may read.

        Admins and managers see every channel. External users see only
        public channels. Other roles see public channels plus the private
        ones they belong to, provided they hold ``channel:read_assigned``.

        Failures:
            FORBIDDEN / UNAUTHORIZED: caller lacks ``channel:read``
        """

        def produce() -> Validation[list[ChannelResponse]]:
            decision = self.evaluator.authorize(identity_id, Permission.CHANNEL_READ)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.CHANNEL_READ)))

            role = self.evaluator.resolve_role(identity_id)
            rows = self.repo.list_with_member_counts(project_id)

            if role not in ELEVATED_ROLES:
                member_of: set[str] = set()
                if role != Role.EXTERNAL and self.evaluator.catalog.has_permission(
                    role, Permission.CHANNEL_READ_ASSIGNED
                ):
                    member_of = self.repo.channel_ids_for_member(identity_id)
                rows = [
                    (channel, count)
                    for channel, count in rows
                    if count == 0 or channel.id in member_of
                ]

            return Valid([self._to_response(channel, count) for channel, count in rows])

        return Response(produce)

    def join_channel(
        self, identity_id: str, channel_id: str
    ) -> Response[ChannelJoinResponse]:
        """Join a channel on behalf of the caller.

        Failures:
            UNAUTHORIZED / FORBIDDEN: no identity, or its role is unknown
            CHANNEL_NOT_FOUND: no such channel
            ALREADY_MEMBER: the caller is already in the channel
            PRIVATE_CHANNEL_INVITE_ONLY: private channel, caller not elevated
            PROJECT_ACCESS_DENIED: regular user outside the channel's project
        """

        def produce() -> Validation[ChannelJoinResponse]:
            if not identity_id:
                return Invalid(AccessDecision.deny(DenialReason.NOT_AUTHENTICATED).to_error())

            role = self.evaluator.resolve_role(identity_id)
            if role is None:
                return Invalid(AccessDecision.deny(DenialReason.LOOKUP_FAILED).to_error())

            outcome = self.evaluator.channels.join_channel(identity_id, role, channel_id)
            if not outcome:
                return Invalid(outcome.to_error(channel_id=channel_id))

            return Valid(
                ChannelJoinResponse(
                    channel_id=channel_id,
                    user_id=identity_id,
                    message=outcome.message,
                )
            )

        return Response(produce)


# Type alias for dependency injection
ChannelSvc = Annotated[ChannelService, Depends(ChannelService)]
