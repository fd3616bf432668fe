"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at a throwaway SQLite file
os.environ.setdefault("DB_ENDPOINT", "sqlite+aiosqlite://")
os.environ.setdefault("DB_KEY", "test-key")
os.environ.setdefault("DB_NAME", "portfolio_test.db")

import pytest  # noqa: E402


@pytest.fixture
def valid_contact_payload():
    return {"name": "A", "email": "a@b.com", "message": "hi"}


@pytest.fixture
def full_contact_payload():
    return {
        "name": "  Ada Lovelace ",
        "email": " Ada@Example.COM ",
        "subject": "  Collaboration  ",
        "message": "  Would love to chat about your projects.  ",
    }
