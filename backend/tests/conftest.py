"""Pytest fixtures and configuration for the Conduit API tests."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached on first use
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("APP__ENV", "test")
os.environ.setdefault("APP__LOG_LEVEL", "WARNING")
os.environ.setdefault("AUTH__JWT__SECRET", "test-jwt-secret")

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from core.config import get_settings
from core.security import create_access_token
from core.session import InMemorySessionStorage


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client for a fully wired app; server errors become 500 responses."""
    from main import create_app

    with TestClient(create_app(), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Clear the settings cache around a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def token() -> str:
    """A valid access token for user 42."""
    return create_access_token("42", email="jake@jake.jake", username="jake")


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def valid_article() -> dict:
    """Article payload that passes every create rule."""
    return {
        "title": "How to Learn TypeScript",
        "description": "A comprehensive guide to TypeScript",
        "body": "TypeScript is a typed superset of JavaScript...",
        "tagList": ["typescript", "javascript"],
    }


@pytest.fixture
def valid_user() -> dict:
    """Registration payload that passes every rule."""
    return {
        "username": "jake_the-dev",
        "email": "jake@jake.jake",
        "password": "Password123!",
    }
