"""HTTP-level fixtures.

The app is built through create_app() with a mock PqsClient, so no PQS
database is needed. ``svc_client`` injects a mock service; ``pqs_client``
runs the real service + repository over canned PQS rows.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import create_app
from src.pm_gateway.auth.jwt_handler import create_party_token

ALICE = "Alice::1220bb"


@pytest.fixture
def mock_service() -> MagicMock:
    service = MagicMock()
    service.get_tokens = AsyncMock(return_value=[])
    service.get_order_book = AsyncMock(return_value=[])
    service.place_order = AsyncMock(return_value="placeholder-order-id")
    return service


@pytest.fixture
def pqs_rows() -> dict[str, list[Any]]:
    """Rows returned by the mock PQS, keyed by template name."""
    return {}


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_party_token(ALICE)}"}


@pytest_asyncio.fixture
async def svc_client(mock_pqs, mock_service) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(pqs=mock_pqs, service=mock_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def pqs_client(mock_pqs, pqs_rows) -> AsyncGenerator[AsyncClient, None]:
    async def _fetch_all(sql, params, operation):
        return pqs_rows.get(params.get("template"), [])

    mock_pqs.fetch_all = AsyncMock(side_effect=_fetch_all)
    app = create_app(pqs=mock_pqs)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
