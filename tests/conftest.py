# -*- coding: utf-8 -*-
"""
Shared test fixtures for the helpdesk API test suite.

Apps are built with create_app() and an injected MemoryStore, so no test
talks to Supabase. Sessions are real HS256 JWTs signed with TEST_JWT_SECRET.
"""

import time

import jwt
import pytest
from unittest.mock import MagicMock

from helpdesk.database.memory_store import MemoryStore
from helpdesk.models.profile import Profile
from helpdesk.server import create_app

TEST_JWT_SECRET = "test-jwt-secret-0123456789-abcdefghij"

ADMIN_ID = "11111111-1111-1111-1111-111111111111"
USER_ID = "22222222-2222-2222-2222-222222222222"
NO_PROFILE_ID = "33333333-3333-3333-3333-333333333333"


# =============================================================================
# SESSIONS
# =============================================================================

def make_token(user_id: str, secret: str = TEST_JWT_SECRET, expires_in: int = 3600, **claims) -> str:
    """Mint a Supabase-style access token."""
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
        "email": f"{user_id[:8]}@example.com",
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def admin_headers():
    return bearer(ADMIN_ID)


@pytest.fixture
def user_headers():
    return bearer(USER_ID)


@pytest.fixture
def no_profile_headers():
    return bearer(NO_PROFILE_ID)


# =============================================================================
# DATABASE
# =============================================================================

def make_profile(user_id: str, role: str) -> Profile:
    profile = Profile()
    profile.id = user_id
    profile.role = role
    return profile


@pytest.fixture
def store():
    """In-memory store with one admin, one plain user and two labels."""
    memory = MemoryStore()
    memory.create(make_profile(ADMIN_ID, Profile.ROLE_ADMIN))
    memory.create(make_profile(USER_ID, Profile.ROLE_USER))
    memory.create_label("bug", "#ef4444")
    memory.create_label("feature", "#22c55e")
    return memory


def make_table_mock(data=None):
    """Create a chained-query mock table returning given data."""
    mock_table = MagicMock()
    for method in [
        'select', 'eq', 'neq', 'limit', 'order', 'in_',
        'insert', 'delete', 'update', 'upsert',
    ]:
        getattr(mock_table, method).return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=data or [])
    return mock_table


@pytest.fixture
def mock_supabase():
    """Create a mock Supabase client whose every table shares one chained mock."""
    mock = MagicMock()
    mock.table.return_value = make_table_mock()
    return mock


# =============================================================================
# FLASK TEST CLIENT
# =============================================================================

@pytest.fixture
def app_factory(store):
    """Build an app wired to the test store; extra services override defaults."""
    def build(services=None, **config):
        overrides = {
            "DEV_MODE": False,
            "SUPABASE_JWT_SECRET": TEST_JWT_SECRET,
            "TESTING": True,
        }
        overrides.update(config)
        wired = {"profile_store": store, "label_store": store}
        wired.update(services or {})
        return create_app(config_override=overrides, services=wired)

    return build


@pytest.fixture
def app(app_factory):
    return app_factory()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def label_id(store: MemoryStore, name: str) -> str:
    return next(label.id for label in store.list_labels() if label.name == name)
