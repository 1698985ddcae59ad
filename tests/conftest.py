"""Shared pytest fixtures and configuration."""

import os

# Settings are read once at import time; configure them before the app loads
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from school_admin.api.deps import get_db, get_password_hasher, get_token_service  # noqa: E402
from school_admin.core.database import build_engine, create_database_tables  # noqa: E402
from school_admin.main import create_app  # noqa: E402
from school_admin.models.course import Course  # noqa: E402
from school_admin.models.student import Student  # noqa: E402
from school_admin.models.teacher import Teacher  # noqa: E402


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: HTTP routes against an in-memory database")


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    eng = build_engine("sqlite://")
    create_database_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory) -> FastAPI:
    """Application wired to the test database."""
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def make_teacher(db: Session):
    """Insert a teacher; pass password= to make it able to log in."""
    def _make(name="Ada Lovelace", department="Mathematics", email="ada@example.com", password=None, **extra):
        teacher = Teacher(
            name=name,
            department=department,
            email=email,
            password_hash=get_password_hasher().hash(password) if password else None,
            **extra,
        )
        db.add(teacher)
        db.commit()
        return teacher
    return _make


@pytest.fixture
def make_student(db: Session):
    def _make(teacher: Teacher, title="Student", created_at=None, courses=(), **extra):
        student = Student(title=title, teacher_id=teacher.id, courses=list(courses), **extra)
        if created_at is not None:
            student.created_at = created_at
        db.add(student)
        db.commit()
        return student
    return _make


@pytest.fixture
def make_course(db: Session):
    def _make(title="Course", teacher: Teacher = None, created_at=None, **extra):
        course = Course(title=title, teacher_id=teacher.id if teacher else None, **extra)
        if created_at is not None:
            course.created_at = created_at
        db.add(course)
        db.commit()
        return course
    return _make


@pytest.fixture
def teacher(make_teacher) -> Teacher:
    return make_teacher()


@pytest.fixture
def auth_headers(teacher: Teacher) -> dict:
    token = get_token_service().issue({"id": teacher.id, "name": teacher.name, "email": teacher.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def timeline():
    """Strictly increasing creation times: timeline(i) -> base + i minutes."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return lambda i: base + timedelta(minutes=i)
