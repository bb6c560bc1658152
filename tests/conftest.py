"""Shared test fixtures."""

import os

# Settings are loaded at import time; give oauth2 mode a signing key.
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use")
os.environ.setdefault("AUTH_MODE", "oauth2")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402


@pytest.fixture
def mock_pqs() -> MagicMock:
    """PqsClient stand-in: no rows, reachable."""
    pqs = MagicMock()
    pqs.fetch_all = AsyncMock(return_value=[])
    pqs.ping = AsyncMock(return_value=None)
    pqs.dispose = AsyncMock(return_value=None)
    return pqs


@pytest.fixture
def mock_repo() -> MagicMock:
    return MagicMock()
