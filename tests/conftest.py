"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from thothix.core.database import Base, get_db
from thothix.core.permissions import Role
from thothix.main import create_app

# Import all models to ensure they're registered with Base.metadata
from thothix.modules.channels.models import Channel
from thothix.modules.messages.models import Message  # noqa: F401
from thothix.modules.projects.models import Project
from thothix.modules.users.models import User
from tests.helpers import make_user


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    """Session used by both the test and the app under test."""
    session_factory = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    with session_factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def app(db: Session) -> Generator[FastAPI, None, None]:
    """Create test application instance."""
    application = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User, Project and Channel Fixtures
# ============================================================


@pytest.fixture
def admin(db: Session) -> User:
    return make_user(db, "admin1", Role.ADMIN)


@pytest.fixture
def manager(db: Session) -> User:
    return make_user(db, "manager1", Role.MANAGER)


@pytest.fixture
def regular_user(db: Session) -> User:
    return make_user(db, "user7", Role.USER)


@pytest.fixture
def other_user(db: Session) -> User:
    return make_user(db, "user8", Role.USER)


@pytest.fixture
def external_user(db: Session) -> User:
    return make_user(db, "guest1", Role.EXTERNAL)


@pytest.fixture
def project(db: Session) -> Project:
    project = Project(id="projectA", name="Project A")
    db.add(project)
    db.flush()
    return project


@pytest.fixture
def other_project(db: Session) -> Project:
    project = Project(id="projectB", name="Project B")
    db.add(project)
    db.flush()
    return project


@pytest.fixture
def channel(db: Session, project: Project) -> Channel:
    """An empty, therefore public, channel in project A."""
    channel = Channel(id="general", name="general", project_id=project.id)
    db.add(channel)
    db.flush()
    return channel

