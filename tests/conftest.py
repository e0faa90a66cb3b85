import os
import tempfile
from collections.abc import Generator

# Required settings must exist before any app module is imported
os.environ.setdefault("ENV", "test")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("GOOGLE_REDIRECT_URI", "http://testserver/api/auth/google/callback")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ["SKIP_DB_INIT"] = "true"
# Test database MUST be separate from the development database
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(tempfile.gettempdir(), "book_thing_test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import models
from database import Base, SessionLocal, engine, get_db
from main import app
from security import create_access_token


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a test database session on freshly created tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    yield session
    session.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test HTTP client that does not follow redirects."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, follow_redirects=False) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session: Session) -> dict:
    """Seed a logged-in user whose provider id is stored as a number."""
    user = models.User(user_id=43214, first_name="Jimmy", last_name="BlueJeans")
    db_session.add(user)
    db_session.flush()

    token = create_access_token(user.id)
    user.access_token = token
    db_session.commit()

    return {
        "id": user.id,
        "user_id": "43214",
        "first_name": "Jimmy",
        "last_name": "BlueJeans",
        "access_token": token,
    }


@pytest.fixture
def auth_headers(test_user: dict) -> dict:
    """Create authentication headers for testing protected endpoints."""
    return {"Authorization": f"Bearer {test_user['access_token']}"}


@pytest.fixture
def seeded_books(db_session: Session) -> list[dict]:
    """Insert ten identical books, as a fresh library would hold."""
    books = [
        models.Book(title="Test title", author="test author", blurb="test description")
        for _ in range(10)
    ]
    db_session.add_all(books)
    db_session.commit()
    return [{"id": b.id, "title": b.title, "author": b.author, "blurb": b.blurb} for b in books]
