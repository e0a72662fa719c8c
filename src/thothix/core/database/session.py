"""Database engine and session management.

Sessions are synchronous: the authorization kernel calls its collaborators
synchronously, and FastAPI runs the synchronous route handlers in its
thread pool.
"""

from collections.abc import Generator
from functools import lru_cache

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from thothix.config import settings
from thothix.core.database.base import Base


@lru_cache
def get_engine() -> Engine:
    """Create the engine on first use."""
    connect_args: dict[str, object] = {}
    if settings.database_url.startswith("sqlite"):
        # Handlers run in worker threads
        connect_args["check_same_thread"] = False

    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Session factory bound to the application engine."""
    return sessionmaker(
        bind=get_engine(),
        expire_on_commit=False,
        autoflush=False,
    )


def create_all(engine: Engine | None = None) -> None:
    """Create every table registered on ``Base.metadata``.

    Model modules must be imported before calling this.
    """
    Base.metadata.create_all(engine or get_engine())


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session.

    Commits when the request finishes normally. Rolls back when the handler
    raised, or when it flagged the request with ``state.rollback_only``
    (set by ``respond`` for failed and faulted outcomes).

    Usage:
        @router.get("/items")
        def list_items(db: Session = Depends(get_db)):
            ...
    """
    with get_session_factory()() as session:
        try:
            yield session
            if getattr(request.state, "rollback_only", False):
                session.rollback()
            else:
                session.commit()
        except Exception:
            session.rollback()
            raise
