"""Pytest configuration and fixtures."""

import os

# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally.
# Must be set before the application settings are first loaded.
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.services.snippet_handler import SnippetHandler  # noqa: E402
from src.services.snippet_store import SnippetStore  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def store(db):
    """Snippet store bound to the test session."""
    return SnippetStore(db)


@pytest.fixture
def handler(store):
    """Snippet handler over the test store."""
    return SnippetHandler(store)


@pytest.fixture(scope="function")
def make_client(db):
    """Factory for test clients sharing the test database.

    Each client keeps its own session cookie, so several users can be logged
    in at once.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def _make(**kwargs) -> TestClient:
        test_client = TestClient(app, **kwargs)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(make_client):
    """Create an anonymous test client with database override."""
    return make_client()


def register_and_login(test_client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    """Register a user and log the client in as them."""
    response = test_client.post(
        "/users/create",
        data={"username": username, "password": password},
        follow_redirects=False,
    )
    assert response.status_code == 303
    response = test_client.post(
        "/users/login",
        data={"username": username, "password": password},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return test_client


@pytest.fixture
def alice(make_client):
    """A client logged in as alice."""
    return register_and_login(make_client(), "alice")


@pytest.fixture
def bob(make_client):
    """A client logged in as bob."""
    return register_and_login(make_client(), "bob")
