"""Unit tests for the role catalog."""

import pytest

from thothix.core.permissions import (
    Permission,
    ResourceScope,
    ResourceType,
    Role,
    RoleCatalog,
    default_role_permissions,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def catalog() -> RoleCatalog:
    return RoleCatalog.default()


class TestPermissionTable:
    """Tests for the default role → permission table."""

    def test_admin_has_every_permission(self, catalog: RoleCatalog) -> None:
        """Admin carries the full permission set."""
        assert catalog.permissions_for(Role.ADMIN) == frozenset(Permission)

    def test_manager_has_everything_except_user_manage(self, catalog: RoleCatalog) -> None:
        """Manager lacks only user management."""
        assert catalog.permissions_for(Role.MANAGER) == frozenset(Permission) - {
            Permission.USER_MANAGE
        }

    def test_user_permissions(self, catalog: RoleCatalog) -> None:
        """Regular users read and message but do not administer."""
        assert catalog.has_permission(Role.USER, Permission.PROJECT_READ)
        assert catalog.has_permission(Role.USER, Permission.CHANNEL_READ_ASSIGNED)
        assert catalog.has_permission(Role.USER, Permission.DM_CREATE)
        assert catalog.has_permission(Role.USER, Permission.FILE_UPLOAD)
        assert not catalog.has_permission(Role.USER, Permission.PROJECT_CREATE)
        assert not catalog.has_permission(Role.USER, Permission.CHANNEL_DELETE)
        assert not catalog.has_permission(Role.USER, Permission.MESSAGE_DELETE)
        assert not catalog.has_permission(Role.USER, Permission.USER_MANAGE)

    def test_external_permissions(self, catalog: RoleCatalog) -> None:
        """External users get the public read-and-post set only."""
        assert catalog.permissions_for(Role.EXTERNAL) == frozenset(
            {
                Permission.CHANNEL_READ,
                Permission.MESSAGE_CREATE,
                Permission.MESSAGE_READ,
                Permission.FILE_READ,
            }
        )

    def test_external_file_upload_is_opt_in(self) -> None:
        """The upload grant for external users follows the policy flag."""
        assert not RoleCatalog.default().has_permission(
            Role.EXTERNAL, Permission.FILE_UPLOAD
        )
        assert RoleCatalog.default(external_file_upload=True).has_permission(
            Role.EXTERNAL, Permission.FILE_UPLOAD
        )

    def test_has_permission_is_stable(self, catalog: RoleCatalog) -> None:
        """Repeated lookups give the same answer."""
        for role in Role:
            for permission in Permission:
                first = catalog.has_permission(role, permission)
                assert catalog.has_permission(role, permission) is first

    def test_table_cannot_be_mutated_through_source(self) -> None:
        """Changing the source mapping after construction has no effect."""
        table = default_role_permissions()
        catalog = RoleCatalog(table)
        table[Role.EXTERNAL] = frozenset(Permission)

        assert not catalog.has_permission(Role.EXTERNAL, Permission.USER_MANAGE)

    def test_unknown_role_in_custom_table_has_nothing(self) -> None:
        """A role missing from a custom table carries no permissions."""
        catalog = RoleCatalog({Role.ADMIN: [Permission.USER_MANAGE]})

        assert catalog.permissions_for(Role.USER) == frozenset()
        assert not catalog.has_permission(Role.USER, Permission.CHANNEL_READ)


class TestHierarchy:
    """Tests for role ranking."""

    def test_ranks(self, catalog: RoleCatalog) -> None:
        assert [catalog.rank_of(role) for role in catalog.roles] == [3, 2, 1, 0]
        assert catalog.roles == (Role.ADMIN, Role.MANAGER, Role.USER, Role.EXTERNAL)

    @pytest.mark.parametrize("role", list(Role))
    def test_meets_minimum_role_is_reflexive(self, catalog: RoleCatalog, role: Role) -> None:
        assert catalog.meets_minimum_role(role, role)

    @pytest.mark.parametrize("required", list(Role))
    def test_admin_meets_every_minimum(self, catalog: RoleCatalog, required: Role) -> None:
        assert catalog.meets_minimum_role(Role.ADMIN, required)

    def test_external_meets_only_external(self, catalog: RoleCatalog) -> None:
        assert catalog.meets_minimum_role(Role.EXTERNAL, Role.EXTERNAL)
        assert not catalog.meets_minimum_role(Role.EXTERNAL, Role.USER)
        assert not catalog.meets_minimum_role(Role.EXTERNAL, Role.MANAGER)
        assert not catalog.meets_minimum_role(Role.EXTERNAL, Role.ADMIN)

    def test_manager_does_not_meet_admin(self, catalog: RoleCatalog) -> None:
        assert catalog.meets_minimum_role(Role.MANAGER, Role.USER)
        assert not catalog.meets_minimum_role(Role.MANAGER, Role.ADMIN)


class TestNames:
    """Tests for permission and scope helpers."""

    def test_permission_parts(self) -> None:
        assert Permission.CHANNEL_READ_ASSIGNED.resource == "channel"
        assert Permission.CHANNEL_READ_ASSIGNED.action == "read_assigned"
        assert Permission("dm:create") is Permission.DM_CREATE

    def test_scope_constructors(self) -> None:
        assert ResourceScope.project("p1") == ResourceScope(ResourceType.PROJECT, "p1")
        assert ResourceScope.channel("c1").type == ResourceType.CHANNEL
