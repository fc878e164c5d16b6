"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest
import structlog
from fastapi.testclient import TestClient

from api.config import APIConfig
from api.main import create_app
from api.store import InMemoryBookRepository


@pytest.fixture
def api_settings():
    """Settings isolated from any local .env file."""
    return APIConfig(_env_file=None, port=3000, public_host="localhost", debug=False)


@pytest.fixture
def book_repository():
    """Create an empty in-memory repository."""
    return InMemoryBookRepository()


@pytest.fixture
def app(api_settings, book_repository):
    """Create a fresh application per test."""
    return create_app(settings=api_settings, repository=book_repository)


@pytest.fixture
def client(app):
    """Create test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restore_logging():
    """Undo global logging changes made by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def sample_book_payload():
    """Create sample book payload for testing."""
    return {"title": "Dune", "author": "Frank Herbert", "publishedYear": 1965}
