"""
Shared pytest fixtures for the Blog API test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation: every test that needs data seeds its own posts and
tears them down explicitly afterwards.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories backed by Faker
- Explicit seed / teardown instead of global hooks
- Test client creation
"""

import os
import pytest
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db
from app.models import BlogPost
from app.store import PostStore


# Initialize Faker for generating test data
fake = Faker()

SEED_POST_COUNT = 10


def generate_post_data() -> dict[str, Any]:
    """
    Build a random post payload in the structured author form.

    Returns:
        Dictionary with title, content and author name parts.
    """
    return {
        "title": fake.sentence(nb_words=4),
        "content": fake.paragraph(),
        "author": {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
        },
    }


def to_store_fields(data: dict[str, Any]) -> dict[str, str]:
    """Convert a generated payload to PostStore fields."""
    return {
        "title": data["title"],
        "content": data["content"],
        "author_first_name": data["author"]["firstName"],
        "author_last_name": data["author"]["lastName"],
    }


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests, improving performance.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and drops them afterwards,
    so no test sees another test's posts.

    Args:
        app: Flask application fixture.

    Yields:
        SQLAlchemy database handle.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def store(db_session) -> PostStore:
    """Provide the document store bound to the test database."""
    return PostStore(db_session)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def post_factory(store):
    """
    Factory fixture for creating BlogPost documents.

    Example:
        def test_something(post_factory):
            post = post_factory(title="My Post")
            assert post.id is not None
    """

    def _create_post(
        title: str | None = None,
        content: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> BlogPost:
        return store.create({
            "title": title or fake.sentence(nb_words=4),
            "content": content or fake.paragraph(),
            "author_first_name": first_name or fake.first_name(),
            "author_last_name": last_name or fake.last_name(),
        })

    return _create_post


@pytest.fixture
def seeded_posts(store) -> list[BlogPost]:
    """
    Seed the store with random posts and tear them down afterwards.

    Yields:
        The seeded BlogPost documents.
    """
    posts = store.insert_many(
        to_store_fields(generate_post_data()) for _ in range(SEED_POST_COUNT)
    )
    yield posts
    store.drop_all()


@pytest.fixture
def sample_post(post_factory) -> BlogPost:
    """Create a single post with known values."""
    return post_factory(
        title="Sample Post",
        content="This is a sample post for testing",
        first_name="Sample",
        last_name="Author",
    )


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_post_data() -> dict[str, Any]:
    """
    Provide valid post data for POST requests.

    Returns:
        Random payload with a structured author.
    """
    return generate_post_data()


@pytest.fixture
def replacement_post_data() -> dict[str, str]:
    """Provide a full replacement body for PUT requests (author composed)."""
    return {
        "title": "Newness",
        "content": "For all is newness here.",
        "author": "New Man",
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
