"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database; the app's get_db
dependency is overridden so requests and assertions share that engine.
"""

import base64
import os

# Must be set before coursehub.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_REQUESTS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coursehub.core.database import Base, get_db
from coursehub.main import app
from coursehub.models import Course, User
from coursehub.services.user_service import user_service

PASSWORD = "s3cret-pass"


def basic_auth(email: str, password: str = PASSWORD) -> dict:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def session_factory():
    # StaticPool keeps a single connection so the in-memory database
    # survives across sessions
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email: str, first_name: str = "Joe", last_name: str = "Smith") -> User:
        return user_service.create_user(
            db,
            first_name=first_name,
            last_name=last_name,
            email_address=email,
            password=PASSWORD,
        )
    return _make_user


@pytest.fixture
def owner(make_user) -> User:
    return make_user("joe@smith.com")


@pytest.fixture
def other_user(make_user) -> User:
    return make_user("sally@jones.com", first_name="Sally", last_name="Jones")


@pytest.fixture
def course(db, owner) -> Course:
    db_course = Course(
        title="Build a Basic Bookcase",
        description="High-end furniture projects are great to dream about.",
        estimated_time="12 hours",
        materials_needed="* 1/2 x 3/4 inch parting strip",
        user_id=owner.id,
    )
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return db_course


@pytest.fixture
def auth():
    """Build Basic Auth headers; the password defaults to the one test users get"""
    return basic_auth
