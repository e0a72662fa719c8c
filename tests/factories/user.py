"""User factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from thothix.modules.users.schemas import UserCreate


class UserCreateFactory(ModelFactory):
    """Factory for creating UserCreate schemas."""

    __model__ = UserCreate

    @classmethod
    def id(cls) -> str:
        """Generate an identity-provider subject."""
        return f"idp-{uuid4().hex[:12]}"

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def name(cls) -> str:
        """Generate a display name."""
        return f"Test User {uuid4().hex[:4]}"

    @classmethod
    def username(cls) -> str:
        return f"user_{uuid4().hex[:6]}"

    @classmethod
    def avatar_url(cls) -> None:
        return None
