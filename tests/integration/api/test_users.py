"""Integration tests for user endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from thothix.core.permissions import Role
from thothix.modules.users.models import User
from tests.factories.user import UserCreateFactory
from tests.helpers import as_identity, make_user


pytestmark = pytest.mark.integration


class TestGetUser:
    """Tests for reading users."""

    async def test_get_user(self, client: AsyncClient, admin: User, regular_user: User) -> None:
        response = await client.get(
            f"/api/v1/users/{regular_user.id}", headers=as_identity(admin.id)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["email"] == "user7@example.com"
        assert body["data"]["system_role"] == "user"

    async def test_get_me(self, client: AsyncClient, regular_user: User) -> None:
        response = await client.get("/api/v1/users/me", headers=as_identity(regular_user.id))

        assert response.status_code == 200
        assert response.json()["data"]["id"] == regular_user.id

    async def test_missing_user_is_problem_detail(
        self, client: AsyncClient, admin: User
    ) -> None:
        response = await client.get("/api/v1/users/nobody", headers=as_identity(admin.id))

        assert response.status_code == 404
        problem = response.json()
        assert problem["status"] == 404
        assert problem["errors"][0]["code"] == "USER_NOT_FOUND"
        assert problem["errors"][0]["details"] == {"user_id": "nobody"}
        assert problem["instance"] == "/api/v1/users/nobody"
        assert problem["trace_id"] == response.headers["X-Request-ID"]

    async def test_missing_identity_header(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/users/me")

        assert response.status_code == 401


class TestListUsers:
    """Tests for GET /api/v1/users."""

    async def test_paginates(self, client: AsyncClient, db: Session, admin: User) -> None:
        for i in range(3):
            make_user(db, f"member{i}", Role.USER)

        response = await client.get(
            "/api/v1/users", params={"page": 1, "per_page": 2}, headers=as_identity(admin.id)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 4
        assert len(data["items"]) == 2
        assert data["total_pages"] == 2

    async def test_rejects_out_of_range_paging(self, client: AsyncClient, admin: User) -> None:
        response = await client.get(
            "/api/v1/users", params={"page": 0, "per_page": 101}, headers=as_identity(admin.id)
        )

        assert response.status_code == 400
        fields = {error["details"]["field"] for error in response.json()["errors"]}
        assert fields == {"page", "per_page"}


class TestCreateUser:
    """Tests for POST /api/v1/users."""

    async def test_admin_creates_user(self, client: AsyncClient, admin: User) -> None:
        data = UserCreateFactory.build()

        response = await client.post(
            "/api/v1/users", json=data.model_dump(), headers=as_identity(admin.id)
        )

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["id"] == data.id
        assert created["email"] == data.email
        assert created["system_role"] == "user"

    async def test_user_cannot_create_users(
        self, client: AsyncClient, regular_user: User
    ) -> None:
        data = UserCreateFactory.build()

        response = await client.post(
            "/api/v1/users", json=data.model_dump(), headers=as_identity(regular_user.id)
        )

        assert response.status_code == 403
        error = response.json()["errors"][0]
        assert error["code"] == "FORBIDDEN"
        assert error["details"]["reason"] == "role_insufficient"

    async def test_unknown_identity_is_forbidden(self, client: AsyncClient) -> None:
        data = UserCreateFactory.build()

        response = await client.post(
            "/api/v1/users", json=data.model_dump(), headers=as_identity("ghost")
        )

        assert response.status_code == 403
        assert response.json()["errors"][0]["details"]["reason"] == "lookup_failed"

    async def test_duplicate_email_conflicts(
        self, client: AsyncClient, admin: User, regular_user: User
    ) -> None:
        data = UserCreateFactory.build(email="USER7@example.com")

        response = await client.post(
            "/api/v1/users", json=data.model_dump(), headers=as_identity(admin.id)
        )

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "CONFLICT"

    async def test_validation_errors_are_collected(
        self, client: AsyncClient, admin: User
    ) -> None:
        response = await client.post(
            "/api/v1/users", json={"email": "not-an-email", "name": " "}, headers=as_identity(admin.id)
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert [e["details"]["field"] for e in errors] == ["email", "name"]
        assert all(e["code"] == "VALIDATION_ERROR" for e in errors)

    @pytest.mark.parametrize("email", ["x@a..com", "x@-bad-.com", "x..y@a.com"])
    async def test_rejects_malformed_addresses(
        self, client: AsyncClient, admin: User, email: str
    ) -> None:
        data = UserCreateFactory.build(email=email)

        response = await client.post(
            "/api/v1/users", json=data.model_dump(), headers=as_identity(admin.id)
        )

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "email"

    async def test_malformed_body_is_422(self, client: AsyncClient, admin: User) -> None:
        response = await client.post(
            "/api/v1/users", json={"email": ["nope"]}, headers=as_identity(admin.id)
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "email"


class TestUpdateUser:
    """Tests for PATCH /api/v1/users/{user_id}."""

    async def test_user_updates_self(self, client: AsyncClient, regular_user: User) -> None:
        response = await client.patch(
            f"/api/v1/users/{regular_user.id}",
            json={"name": "Seven"},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Seven"

    async def test_user_cannot_update_others(
        self, client: AsyncClient, regular_user: User, other_user: User
    ) -> None:
        response = await client.patch(
            f"/api/v1/users/{other_user.id}",
            json={"name": "Hijacked"},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 403

    async def test_email_taken(
        self, client: AsyncClient, admin: User, regular_user: User, other_user: User
    ) -> None:
        response = await client.patch(
            f"/api/v1/users/{regular_user.id}",
            json={"email": other_user.email},
            headers=as_identity(admin.id),
        )

        assert response.status_code == 409

    async def test_missing_user(self, client: AsyncClient, admin: User) -> None:
        response = await client.patch(
            "/api/v1/users/nobody", json={"name": "x"}, headers=as_identity(admin.id)
        )

        assert response.status_code == 404


class TestDeleteUser:
    """Tests for DELETE /api/v1/users/{user_id}."""

    async def test_admin_deletes_user(
        self, client: AsyncClient, db: Session, admin: User, other_user: User
    ) -> None:
        response = await client.delete(
            f"/api/v1/users/{other_user.id}", headers=as_identity(admin.id)
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"message": "User deleted successfully"}
        assert db.get(User, "user8") is None

    async def test_manager_cannot_delete_user(
        self, client: AsyncClient, manager: User, other_user: User
    ) -> None:
        response = await client.delete(
            f"/api/v1/users/{other_user.id}", headers=as_identity(manager.id)
        )

        assert response.status_code == 403


class TestAssignRole:
    """Tests for PUT /api/v1/users/{user_id}/role."""

    async def test_admin_assigns_role(
        self, client: AsyncClient, admin: User, regular_user: User
    ) -> None:
        response = await client.put(
            f"/api/v1/users/{regular_user.id}/role",
            json={"role": "manager"},
            headers=as_identity(admin.id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["system_role"] == "manager"

    async def test_manager_is_below_minimum_role(
        self, client: AsyncClient, manager: User, regular_user: User
    ) -> None:
        response = await client.put(
            f"/api/v1/users/{regular_user.id}/role",
            json={"role": "admin"},
            headers=as_identity(manager.id),
        )

        assert response.status_code == 403
        problem = response.json()
        assert problem["required_role"] == "admin"
        assert problem["reason"] == "role_insufficient"

    async def test_unknown_role_name(
        self, client: AsyncClient, admin: User, regular_user: User
    ) -> None:
        response = await client.put(
            f"/api/v1/users/{regular_user.id}/role",
            json={"role": "superuser"},
            headers=as_identity(admin.id),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["details"]["field"] == "role"
