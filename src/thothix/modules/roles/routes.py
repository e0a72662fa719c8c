"""Role catalog API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from thothix.api.dependencies import Catalog, CurrentIdentity
from thothix.core.permissions import Permission, Role


router = APIRouter(prefix="/roles", tags=["roles"])


class RoleInfo(BaseModel):
    """A role, its rank and the permissions it carries."""

    role: Role
    rank: int
    permissions: list[Permission]


class RoleCatalogResponse(BaseModel):
    """The full role catalog, highest rank first."""

    roles: list[RoleInfo]
    permissions: list[Permission]


@router.get(
    "",
    response_model=RoleCatalogResponse,
    summary="Role catalog",
    description="Every role with its hierarchy rank and permission set.",
)
def list_roles(catalog: Catalog, _identity: CurrentIdentity) -> RoleCatalogResponse:
    """Describe the role catalog."""
    return RoleCatalogResponse(
        roles=[
            RoleInfo(
                role=role,
                rank=catalog.rank_of(role),
                permissions=sorted(catalog.permissions_for(role)),
            )
            for role in catalog.roles
        ],
        permissions=list(Permission),
    )
