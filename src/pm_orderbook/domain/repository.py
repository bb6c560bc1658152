# src/pm_orderbook/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the PQS-backed implementation.
"""

from typing import Protocol

from src.pm_orderbook.domain.models import OrderInfo, TokenInfo


class OrderBookRepositoryProtocol(Protocol):
    async def list_tokens(self, owner: str) -> list[TokenInfo]: ...

    async def list_buy_orders(
        self, base_symbol: str, quote_symbol: str
    ) -> list[OrderInfo]: ...

    async def list_sell_orders(
        self, base_symbol: str, quote_symbol: str
    ) -> list[OrderInfo]: ...

    async def list_exchange_ids(self, limit: int) -> list[str]: ...
