"""Integration tests for channel and direct message endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from thothix.modules.channels.models import Channel
from thothix.modules.messages.models import Message
from thothix.modules.users.models import User
from tests.helpers import add_channel_member, as_identity


pytestmark = pytest.mark.integration


class TestSendMessage:
    """Tests for POST /api/v1/channels/{channel_id}/messages."""

    async def test_external_posts_to_public_channel(
        self, client: AsyncClient, external_user: User, channel: Channel
    ) -> None:
        response = await client.post(
            f"/api/v1/channels/{channel.id}/messages",
            json={"content": "hello"},
            headers=as_identity(external_user.id),
        )

        assert response.status_code == 201
        message = response.json()["data"]
        assert message["content"] == "hello"
        assert message["sender_id"] == external_user.id
        assert message["channel_id"] == channel.id
        assert message["recipient_id"] is None

    async def test_member_posts_to_private_channel(
        self, client: AsyncClient, db: Session, regular_user: User, channel: Channel
    ) -> None:
        add_channel_member(db, channel.id, regular_user.id)

        response = await client.post(
            f"/api/v1/channels/{channel.id}/messages",
            json={"content": "team only"},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 201

    @pytest.mark.parametrize("identity", ["user8", "guest1"])
    async def test_outsiders_cannot_post_to_private_channel(
        self,
        client: AsyncClient,
        db: Session,
        regular_user: User,
        other_user: User,
        external_user: User,
        channel: Channel,
        identity: str,
    ) -> None:
        add_channel_member(db, channel.id, regular_user.id)

        response = await client.post(
            f"/api/v1/channels/{channel.id}/messages",
            json={"content": "let me in"},
            headers=as_identity(identity),
        )

        assert response.status_code == 403
        assert response.json()["errors"][0]["code"] == "FORBIDDEN"

    async def test_unknown_channel(self, client: AsyncClient, external_user: User) -> None:
        response = await client.post(
            "/api/v1/channels/no-such-channel/messages",
            json={"content": "anyone there?"},
            headers=as_identity(external_user.id),
        )

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "CHANNEL_NOT_FOUND"

    async def test_empty_content(
        self, client: AsyncClient, regular_user: User, channel: Channel
    ) -> None:
        response = await client.post(
            f"/api/v1/channels/{channel.id}/messages",
            json={"content": "   "},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["details"]["field"] == "content"


class TestListMessages:
    """Tests for GET /api/v1/channels/{channel_id}/messages."""

    @pytest.fixture
    def history(self, db: Session, regular_user: User, channel: Channel) -> list[Message]:
        """Three messages posted a minute apart, oldest first."""
        start = datetime(2026, 1, 1, tzinfo=UTC)
        messages = [
            Message(
                content=f"message {i}",
                sender_id=regular_user.id,
                channel_id=channel.id,
                created_at=start + timedelta(minutes=i),
            )
            for i in range(3)
        ]
        db.add_all(messages)
        db.flush()
        return messages

    async def test_newest_first_with_paging(
        self, client: AsyncClient, regular_user: User, channel: Channel, history: list[Message]
    ) -> None:
        response = await client.get(
            f"/api/v1/channels/{channel.id}/messages",
            params={"page": 1, "per_page": 2},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert [m["content"] for m in data["items"]] == ["message 2", "message 1"]
        assert data["total"] == 3
        assert data["total_pages"] == 2

        second = await client.get(
            f"/api/v1/channels/{channel.id}/messages",
            params={"page": 2, "per_page": 2},
            headers=as_identity(regular_user.id),
        )
        assert [m["content"] for m in second.json()["data"]["items"]] == ["message 0"]

    async def test_external_cannot_read_private_channel(
        self,
        client: AsyncClient,
        db: Session,
        regular_user: User,
        external_user: User,
        channel: Channel,
        history: list[Message],
    ) -> None:
        add_channel_member(db, channel.id, external_user.id)

        response = await client.get(
            f"/api/v1/channels/{channel.id}/messages", headers=as_identity(external_user.id)
        )

        assert response.status_code == 403
        assert response.json()["errors"][0]["details"]["reason"] == "role_insufficient"

    async def test_rejects_out_of_range_paging(
        self, client: AsyncClient, regular_user: User, channel: Channel
    ) -> None:
        response = await client.get(
            f"/api/v1/channels/{channel.id}/messages",
            params={"page": 0, "per_page": 101},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 400
        fields = [e["details"]["field"] for e in response.json()["errors"]]
        assert fields == ["page", "per_page"]

    async def test_unknown_channel(self, client: AsyncClient, admin: User) -> None:
        response = await client.get(
            "/api/v1/channels/missing/messages", headers=as_identity(admin.id)
        )

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "CHANNEL_NOT_FOUND"


class TestDirectMessage:
    """Tests for POST /api/v1/messages/direct."""

    async def test_user_sends_direct_message(
        self, client: AsyncClient, regular_user: User, other_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/messages/direct",
            json={"recipient_id": other_user.id, "content": "hi"},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 201
        message = response.json()["data"]
        assert message["recipient_id"] == other_user.id
        assert message["sender_id"] == regular_user.id
        assert message["channel_id"] is None

    async def test_external_cannot_send_direct_messages(
        self, client: AsyncClient, external_user: User, regular_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/messages/direct",
            json={"recipient_id": regular_user.id, "content": "hi"},
            headers=as_identity(external_user.id),
        )

        assert response.status_code == 403
        assert response.json()["errors"][0]["details"]["reason"] == "role_insufficient"

    async def test_unknown_recipient(self, client: AsyncClient, regular_user: User) -> None:
        response = await client.post(
            "/api/v1/messages/direct",
            json={"recipient_id": "ghost", "content": "hi"},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "USER_NOT_FOUND"

    async def test_validation_errors_are_collected(
        self, client: AsyncClient, regular_user: User
    ) -> None:
        response = await client.post(
            "/api/v1/messages/direct",
            json={"recipient_id": regular_user.id, "content": ""},
            headers=as_identity(regular_user.id),
        )

        assert response.status_code == 400
        fields = [e["details"]["field"] for e in response.json()["errors"]]
        assert fields == ["recipient_id", "content"]
