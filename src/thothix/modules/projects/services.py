"""Project service for business logic."""

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
)
from thothix.modules.projects.models import Project
from thothix.modules.projects.repos import ProjectRepo
from thothix.modules.projects.schemas import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberResponse,
    ProjectResponse,
    ProjectUpdate,
)
from thothix.modules.users.repos import UserRepo


def _project_not_found(project_id: str) -> Invalid:
    return Invalid(
        StructuredError.create(
            ErrorCode.PROJECT_NOT_FOUND, "Project not found", project_id=project_id
        )
    )


def _name_error(name: str) -> StructuredError | None:
    if not name:
        return StructuredError.create(
            ErrorCode.VALIDATION_ERROR, "Project name is required", field="name"
        )
    if len(name) > MAX_NAME_LENGTH:
        return StructuredError.create(
            ErrorCode.VALIDATION_ERROR,
            f"Project name must be at most {MAX_NAME_LENGTH} characters",
            field="name",
        )
    return None


def _scoped_denial(decision: AccessDecision, project_id: str) -> Invalid:
    if decision.reason == DenialReason.RESOURCE_NOT_FOUND:
        return _project_not_found(project_id)
    return Invalid(decision.to_error(project_id=project_id))


class ProjectService:
    """Service for project operations.

    Project reads are scoped: admins and managers see every project,
    other roles only the projects they are members of.
    """

    def __init__(self, repo: ProjectRepo, users: UserRepo, evaluator: Evaluator) -> None:
        self.repo = repo
        self.users = users
        self.evaluator = evaluator

    def create_project(
        self, identity_id: str, data: ProjectCreate
    ) -> Response[ProjectResponse]:
        """Create a project and make the creator its first member.

        Failures:
            VALIDATION_ERROR: missing or overlong name
            FORBIDDEN / UNAUTHORIZED: caller lacks ``project:create``
        """

        def produce() -> Validation[ProjectResponse]:
            name = data.name.strip()
            error = _name_error(name)
            if error is not None:
                return Invalid(error)

            decision = self.evaluator.authorize(identity_id, Permission.PROJECT_CREATE)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.PROJECT_CREATE)))

            project = self.repo.create(
                Project(name=name, description=data.description, created_by=identity_id)
            )
            if self.users.get_by_id(identity_id) is not None:
                self.repo.add_member(project.id, identity_id)

            return Valid(ProjectResponse.model_validate(project))

        return Response(produce)

    def get_project(self, identity_id: str, project_id: str) -> Response[ProjectResponse]:
        """Get a project the caller may read.

        Failures:
            FORBIDDEN / UNAUTHORIZED: caller may not read this project
            PROJECT_NOT_FOUND: no such project
        """

        def produce() -> Validation[ProjectResponse]:
            decision = self.evaluator.authorize(
                identity_id, Permission.PROJECT_READ, ResourceScope.project(project_id)
            )
            if not decision:
                return _scoped_denial(decision, project_id)

            project = self.repo.get_by_id(project_id)
            if project is None:
                return _project_not_found(project_id)
            return Valid(ProjectResponse.model_validate(project))

        return Response(produce)

    def list_projects(self, identity_id: str) -> Response[list[ProjectResponse]]:
        """List the projects the caller may read."""

        def produce() -> Validation[list[ProjectResponse]]:
            decision = self.evaluator.authorize(identity_id, Permission.PROJECT_READ)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.PROJECT_READ)))

            role = self.evaluator.resolve_role(identity_id)
            if role in ELEVATED_ROLES:
                projects = self.repo.list_all()
            else:
                projects = self.repo.list_for_member(identity_id)
            return Valid([ProjectResponse.model_validate(p) for p in projects])

        return Response(produce)

    def add_member(
        self, identity_id: str, project_id: str, data: ProjectMemberAdd
    ) -> Response[ProjectMemberResponse]:
        """Add a user to a project.

        Failures:
            VALIDATION_ERROR: empty user ID
            FORBIDDEN / UNAUTHORIZED: caller lacks ``project:manage`` here
            PROJECT_NOT_FOUND / USER_NOT_FOUND: unknown project or user
            ALREADY_MEMBER: the user is already in the project
        """

        def produce() -> Validation[ProjectMemberResponse]:
            if not data.user_id:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.VALIDATION_ERROR, "User ID is required", field="user_id"
                    )
                )

            decision = self.evaluator.authorize(
                identity_id, Permission.PROJECT_MANAGE, ResourceScope.project(project_id)
            )
            if not decision:
                return _scoped_denial(decision, project_id)

            if self.repo.get_by_id(project_id) is None:
                return _project_not_found(project_id)
            if self.users.get_by_id(data.user_id) is None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.USER_NOT_FOUND, "User not found", user_id=data.user_id
                    )
                )
            if self.repo.get_member(project_id, data.user_id) is not None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.ALREADY_MEMBER,
                        "Already a member of this project",
                        project_id=project_id,
                        user_id=data.user_id,
                    )
                )

            member = self.repo.add_member(project_id, data.user_id)
            return Valid(ProjectMemberResponse.model_validate(member))

        return Response(produce)

    def remove_member(
        self, identity_id: str, project_id: str, user_id: str
    ) -> Response[str]:
        """Remove a user from a project.

        Failures:
            FORBIDDEN / UNAUTHORIZED: caller lacks ``project:manage`` here
            PROJECT_NOT_FOUND: no such project
            NOT_FOUND: the user is not a member
        """

        def produce() -> Validation[str]:
            decision = self.evaluator.authorize(
                identity_id, Permission.PROJECT_MANAGE, ResourceScope.project(project_id)
            )
            if not decision:
                return _scoped_denial(decision, project_id)

            member = self.repo.get_member(project_id, user_id)
            if member is None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.NOT_FOUND,
                        "User is not a member of this project",
                        project_id=project_id,
                        user_id=user_id,
                    )
                )

            self.repo.remove_member(member)
            return Valid("Member removed successfully")

        return Response(produce)

    def update_project(
        self, identity_id: str, project_id: str, data: ProjectUpdate
    ) -> Response[ProjectResponse]:
        """Rename a project or change its description.

        Failures:
            VALIDATION_ERROR: blank or overlong name
            FORBIDDEN / UNAUTHORIZED: caller lacks ``project:update`` here
            PROJECT_NOT_FOUND: no such project
        """

        def produce() -> Validation[ProjectResponse]:
            name = data.name.strip() if data.name is not None else None
            if name is not None:
                error = _name_error(name)
                if error is not None:
                    return Invalid(error)

            decision = self.evaluator.authorize(
                identity_id, Permission.PROJECT_UPDATE, ResourceScope.project(project_id)
            )
            if not decision:
                return _scoped_denial(decision, project_id)

            project = self.repo.get_by_id(project_id)
            if project is None:
                return _project_not_found(project_id)

            if name is not None:
                project.name = name
            if data.description is not None:
                project.description = data.description
            return Valid(ProjectResponse.model_validate(self.repo.update(project)))

        return Response(produce)

    def delete_project(self, identity_id: str, project_id: str) -> Response[str]:
        """Delete a project together with its channels and memberships.

        Failures:
            FORBIDDEN / UNAUTHORIZED: caller lacks ``project:delete``
            PROJECT_NOT_FOUND: no such project
        """

        def produce() -> Validation[str]:
            decision = self.evaluator.authorize(
                identity_id, Permission.PROJECT_DELETE, ResourceScope.project(project_id)
            )
            if not decision:
                return _scoped_denial(decision, project_id)

            project = self.repo.get_by_id(project_id)
            if project is None:
                return _project_not_found(project_id)

            self.repo.delete(project)
            return Valid("Project deleted successfully")

        return Response(produce)


# Type alias for dependency injection
ProjectSvc = Annotated[ProjectService, Depends(ProjectService)]
