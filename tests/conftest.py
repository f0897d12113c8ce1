# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eduguide.core.config import Settings
from eduguide.db.base import Base
from eduguide.models.user_model import Role, UserCreate
from eduguide.services import user_service
from eduguide.services.database_service import DatabaseService


# --- Database Fixtures ---

@pytest.fixture
def engine():
    """A fresh in-memory SQLite database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        google_api_key="test-key",
        secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        csv_chunk_size=2,
        gemini_timeout_seconds=1,
    )


# --- User Fixtures ---

@pytest.fixture
def make_user(db_service):
    def _make_user(name, email, role=Role.TEACHER, password="secret123"):
        return user_service.create_user(
            db_service, UserCreate(name=name, email=email, password=password, role=role)
        )
    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("Ada Admin", "admin@example.com", role=Role.ADMIN)


@pytest.fixture
def teacher(make_user):
    return make_user("Tom Teacher", "teacher@example.com")


@pytest.fixture
def other_teacher(make_user):
    return make_user("Olga Other", "other@example.com")


# --- File Fixtures ---

@pytest.fixture
def write_csv(tmp_path):
    """Writes CSV text to a temporary file and returns its path."""
    def _write_csv(content, name="roster.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write_csv
