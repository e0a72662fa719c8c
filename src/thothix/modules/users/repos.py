"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from thothix.api.dependencies import DBSession
from thothix.modules.users.models import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: str) -> User | None:
        """Get a user by ID."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.session.scalars(stmt).first()

    def list_page(self, page: int = 1, per_page: int = 20) -> tuple[list[User], int]:
        """List users with pagination.

        Args:
            page: Page number (1-indexed)
            per_page: Number of items per page

        Returns:
            Tuple of (users list, total count)
        """
        total = self.session.scalar(select(func.count()).select_from(User)) or 0

        offset = (page - 1) * per_page
        stmt = (
            select(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(offset)
            .limit(per_page)
        )
        users = list(self.session.scalars(stmt).all())

        return users, total

    def update(self, user: User) -> User:
        """Persist changes to a user."""
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Delete a user."""
        self.session.delete(user)
        self.session.flush()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
