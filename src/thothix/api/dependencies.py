"""Shared API dependencies.

The caller identity is read from the ``X-Identity-ID`` header, which the
identity-provider gateway sets after verifying the bearer token. It is then
passed explicitly to every service call; nothing below the route layer
looks it up on its own.
"""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from thothix.config import settings
from thothix.core.constants import IDENTITY_HEADER
from thothix.core.database import get_db
from thothix.core.errors import ForbiddenError, UnauthorizedError
from thothix.core.permissions import PermissionEvaluator, Role, RoleCatalog
from thothix.core.permissions.sql import SqlMembershipStore, SqlRoleProvider


# Type alias for database session dependency
DBSession = Annotated[Session, Depends(get_db)]


@lru_cache
def get_role_catalog() -> RoleCatalog:
    """Process-wide role catalog, built once from settings."""
    return RoleCatalog.default(external_file_upload=settings.external_file_upload)


Catalog = Annotated[RoleCatalog, Depends(get_role_catalog)]


def get_evaluator(db: DBSession, catalog: Catalog) -> PermissionEvaluator:
    """Request-scoped evaluator over the request's database session."""
    return PermissionEvaluator(
        catalog,
        SqlRoleProvider(db),
        SqlMembershipStore(db),
        fallback_role=settings.role_lookup_fallback,
    )


Evaluator = Annotated[PermissionEvaluator, Depends(get_evaluator)]


def get_current_identity(
    request: Request,
    identity_id: Annotated[str | None, Header(alias=IDENTITY_HEADER)] = None,
) -> str:
    """Get the verified caller identity.

    Raises:
        UnauthorizedError: If the identity header is missing or empty
    """
    if not identity_id or not identity_id.strip():
        raise UnauthorizedError(
            "Missing caller identity",
            details={"header": IDENTITY_HEADER},
        )

    identity_id = identity_id.strip()
    request.state.user_id = identity_id
    return identity_id


CurrentIdentity = Annotated[str, Depends(get_current_identity)]


def require_role(minimum: Role) -> Callable[..., str]:
    """Dependency factory enforcing a minimum role in the hierarchy.

    Usage:
        @router.put("/{user_id}/role")
        def assign_role(identity: Annotated[str, Depends(require_role(Role.ADMIN))]):
            ...

    Args:
        minimum: The lowest role allowed through

    Returns:
        A dependency returning the caller identity

    Raises:
        ForbiddenError: If the caller ranks below ``minimum`` or has no role
    """

    def dependency(identity: CurrentIdentity, evaluator: Evaluator) -> str:
        decision = evaluator.require_role(identity, minimum)
        if not decision:
            raise ForbiddenError(
                "Insufficient role privileges",
                details={
                    "required_role": str(minimum),
                    "reason": str(decision.reason),
                },
            )
        return identity

    return dependency
