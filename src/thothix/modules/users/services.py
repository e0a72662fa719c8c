"""User service for business logic.

Every operation returns a ``Response`` whose producer validates input,
checks authorization and then talks to the repository. Expected failures
come back as ``Invalid``; anything the repository raises is left for the
``Response`` to capture as a fault.
"""

import math
from typing import Annotated

from fastapi import Depends
from pydantic import EmailStr, TypeAdapter, ValidationError

from thothix.api.dependencies import Evaluator
from thothix.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MAX_PAGE_SIZE
from thothix.core.outcome import (
    ErrorCode,
    Invalid,
    Response,
    StructuredError,
    Valid,
    Validation,
)
from thothix.core.permissions import Permission, Role
from thothix.modules.users.models import User
from thothix.modules.users.repos import UserRepo
from thothix.modules.users.schemas import (
    RoleAssignment,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)


_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _field_error(field: str, message: str) -> StructuredError:
    return StructuredError.create(ErrorCode.VALIDATION_ERROR, message, field=field)


def _user_not_found(user_id: str) -> Invalid:
    return Invalid(
        StructuredError.create(ErrorCode.USER_NOT_FOUND, "User not found", user_id=user_id)
    )


def _email_errors(email: str) -> list[StructuredError]:
    if not email:
        return [_field_error("email", "Email is required")]
    if len(email) > MAX_EMAIL_LENGTH:
        return [_field_error("email", "Email is not a valid address")]
    try:
        _EMAIL_ADAPTER.validate_python(email)
    except ValidationError:
        return [_field_error("email", "Email is not a valid address")]
    return []


def _name_errors(name: str) -> list[StructuredError]:
    if not name.strip():
        return [_field_error("name", "Name is required")]
    if len(name) > MAX_NAME_LENGTH:
        return [_field_error("name", f"Name must be at most {MAX_NAME_LENGTH} characters")]
    return []


class UserService:
    """Service for user management operations."""

    def __init__(self, repo: UserRepo, evaluator: Evaluator) -> None:
        self.repo = repo
        self.evaluator = evaluator

    def get_user(self, user_id: str) -> Response[UserResponse]:
        """Get a user by ID.

        Failures:
            VALIDATION_ERROR: empty ID
            USER_NOT_FOUND: no such user
        """

        def produce() -> Validation[UserResponse]:
            if not user_id:
                return Invalid(_field_error("user_id", "User ID cannot be empty"))

            user = self.repo.get_by_id(user_id)
            if user is None:
                return _user_not_found(user_id)
            return Valid(UserResponse.model_validate(user))

        return Response(produce)

    def list_users(self, page: int, per_page: int) -> Response[UserListResponse]:
        """List users page by page.

        Failures:
            VALIDATION_ERROR: page below 1 or per_page outside 1..100
        """

        def produce() -> Validation[UserListResponse]:
            errors: list[StructuredError] = []
            if page < 1:
                errors.append(_field_error("page", "Page must be greater than 0"))
            if per_page < 1 or per_page > MAX_PAGE_SIZE:
                errors.append(
                    _field_error("per_page", f"Per page must be between 1 and {MAX_PAGE_SIZE}")
                )
            if errors:
                return Invalid(*errors)

            users, total = self.repo.list_page(page, per_page)
            return Valid(
                UserListResponse(
                    items=[UserResponse.model_validate(u) for u in users],
                    total=total,
                    page=page,
                    per_page=per_page,
                    total_pages=math.ceil(total / per_page) if total else 0,
                )
            )

        return Response(produce)

    def create_user(self, identity_id: str, data: UserCreate) -> Response[UserResponse]:
        """Create a user. Requires ``user:manage``.

        Failures:
            VALIDATION_ERROR: missing or malformed email/name
            FORBIDDEN / UNAUTHORIZED: caller may not manage users
            CONFLICT: email or ID already registered
        """

        def produce() -> Validation[UserResponse]:
            errors = _email_errors(data.email) + _name_errors(data.name)
            if errors:
                return Invalid(*errors)

            decision = self.evaluator.authorize(identity_id, Permission.USER_MANAGE)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.USER_MANAGE)))

            if self.repo.get_by_email(data.email) is not None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.CONFLICT,
                        "User with this email already exists",
                        email=data.email,
                    )
                )
            if data.id and self.repo.get_by_id(data.id) is not None:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.CONFLICT, "User with this ID already exists", user_id=data.id
                    )
                )

            user = User(
                email=data.email,
                name=data.name.strip(),
                username=data.username,
                avatar_url=data.avatar_url,
                system_role=Role.USER,
            )
            if data.id:
                user.id = data.id

            return Valid(UserResponse.model_validate(self.repo.create(user)))

        return Response(produce)

    def update_user(
        self, identity_id: str, user_id: str, data: UserUpdate
    ) -> Response[UserResponse]:
        """Update a user's profile.

        Users may update themselves; updating anybody else requires
        ``user:manage``.

        Failures:
            VALIDATION_ERROR: empty ID or malformed fields
            FORBIDDEN / UNAUTHORIZED: caller may not manage users
            USER_NOT_FOUND: no such user
            CONFLICT: new email already in use
        """

        def produce() -> Validation[UserResponse]:
            errors: list[StructuredError] = []
            if not user_id:
                errors.append(_field_error("user_id", "User ID cannot be empty"))
            if data.email is not None:
                errors.extend(_email_errors(data.email))
            if data.name is not None:
                errors.extend(_name_errors(data.name))
            if errors:
                return Invalid(*errors)

            if identity_id != user_id:
                decision = self.evaluator.authorize(identity_id, Permission.USER_MANAGE)
                if not decision:
                    return Invalid(
                        decision.to_error(permission=str(Permission.USER_MANAGE))
                    )

            user = self.repo.get_by_id(user_id)
            if user is None:
                return _user_not_found(user_id)

            if data.email is not None and data.email.lower() != user.email.lower():
                if self.repo.get_by_email(data.email) is not None:
                    return Invalid(
                        StructuredError.create(
                            ErrorCode.CONFLICT, "Email already in use", email=data.email
                        )
                    )
                user.email = data.email

            if data.name is not None:
                user.name = data.name.strip()
            if data.username is not None:
                user.username = data.username
            if data.avatar_url is not None:
                user.avatar_url = data.avatar_url

            return Valid(UserResponse.model_validate(self.repo.update(user)))

        return Response(produce)

    def delete_user(self, identity_id: str, user_id: str) -> Response[str]:
        """Delete a user. Requires ``user:manage``.

        Failures:
            VALIDATION_ERROR: empty ID
            FORBIDDEN / UNAUTHORIZED: caller may not manage users
            USER_NOT_FOUND: no such user
        """

        def produce() -> Validation[str]:
            if not user_id:
                return Invalid(_field_error("user_id", "User ID cannot be empty"))

            decision = self.evaluator.authorize(identity_id, Permission.USER_MANAGE)
            if not decision:
                return Invalid(decision.to_error(permission=str(Permission.USER_MANAGE)))

            user = self.repo.get_by_id(user_id)
            if user is None:
                return _user_not_found(user_id)

            self.repo.delete(user)
            return Valid("User deleted successfully")

        return Response(produce)

    def assign_role(self, user_id: str, data: RoleAssignment) -> Response[UserResponse]:
        """Change a user's system role.

        The route guards this with a minimum-role check; the service only
        validates the role name and the target user.

        Failures:
            VALIDATION_ERROR: unknown role name
            USER_NOT_FOUND: no such user
        """

        def produce() -> Validation[UserResponse]:
            try:
                role = Role(data.role.strip().lower())
            except ValueError:
                return Invalid(
                    StructuredError.create(
                        ErrorCode.VALIDATION_ERROR,
                        f"Unknown role {data.role!r}",
                        field="role",
                        allowed=[str(r) for r in Role],
                    )
                )

            user = self.repo.get_by_id(user_id)
            if user is None:
                return _user_not_found(user_id)

            user.system_role = role
            return Valid(UserResponse.model_validate(self.repo.update(user)))

        return Response(produce)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
