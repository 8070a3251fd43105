"""
Shared fixtures: a fresh forum store per test, wired into the app.
"""

import pytest
from fastapi.testclient import TestClient

from qaforum.main import app
from qaforum.modules.forum.store import ForumStore, get_forum_store


@pytest.fixture
def store():
    return ForumStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_forum_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
