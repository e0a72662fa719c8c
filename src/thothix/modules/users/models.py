"""User database models."""

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from thothix.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_ROLE_NAME_LENGTH,
    MAX_USERNAME_LENGTH,
)
from thothix.core.database.base import Base, IDMixin, TimestampMixin
from thothix.core.permissions import Role


class User(Base, IDMixin, TimestampMixin):
    """User synchronized from the identity provider.

    The primary key is the identity-provider subject, so it is the same
    identity id the permission evaluator receives.

    Attributes:
        email: Unique email address
        name: Display name
        username: Optional handle
        avatar_url: Optional avatar location
        system_role: The user's role in the role catalog
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    username: Mapped[str | None] = mapped_column(
        String(MAX_USERNAME_LENGTH),
        nullable=True,
    )
    avatar_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    system_role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            native_enum=False,
            length=MAX_ROLE_NAME_LENGTH,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=Role.USER,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User({self.id}, {self.system_role})>"
