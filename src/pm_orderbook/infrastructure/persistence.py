"""OrderBookRepository — PQS-backed implementation of OrderBookRepositoryProtocol.

All queries use raw text() SQL against PQS ``active(:template)`` functions.
Payload fields are extracted with ``payload->>'<field>'`` so every value comes
back as text; Decimal fields are cast only for ORDER BY.
"""

from typing import Any

from sqlalchemy import text

from src.pm_common.decimals import price_key
from src.pm_common.enums import DamlTemplate, OrderType
from src.pm_common.pqs import PqsClient
from src.pm_orderbook.domain.models import OrderInfo, TokenInfo

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LIST_TOKENS_SQL = text("""
    SELECT contract_id,
           payload->>'issuer' AS issuer,
           payload->>'owner'  AS owner,
           payload->>'symbol' AS symbol,
           payload->>'amount' AS amount
    FROM active(:template)
    WHERE payload->>'owner' = :owner
    ORDER BY payload->>'symbol', contract_id
""")

_ORDER_COLUMNS = """
    SELECT contract_id,
           payload->>'exchange'      AS exchange,
           payload->>'trader'        AS trader,
           payload->>'baseSymbol'    AS base_symbol,
           payload->>'quoteSymbol'   AS quote_symbol,
           payload->>'price'         AS price,
           payload->>'quantity'      AS quantity,
           payload->>'collateralCid' AS collateral_cid
    FROM active(:template)
    WHERE payload->>'baseSymbol' = :base_symbol
      AND payload->>'quoteSymbol' = :quote_symbol
"""

# Best bid first
_LIST_BUY_ORDERS_SQL = text(
    _ORDER_COLUMNS + "    ORDER BY CAST(payload->>'price' AS DECIMAL) DESC\n"
)

# Best ask first
_LIST_SELL_ORDERS_SQL = text(
    _ORDER_COLUMNS + "    ORDER BY CAST(payload->>'price' AS DECIMAL) ASC\n"
)

_LIST_EXCHANGES_SQL = text("""
    SELECT contract_id
    FROM active(:template)
    ORDER BY contract_id
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_token(row: Any) -> TokenInfo:
    return TokenInfo(
        issuer=row.issuer,
        owner=row.owner,
        symbol=row.symbol,
        amount=row.amount,
        contract_id=row.contract_id,
    )


def _row_to_order(row: Any, order_type: OrderType) -> OrderInfo:
    return OrderInfo(
        exchange=row.exchange,
        trader=row.trader,
        base_symbol=row.base_symbol,
        quote_symbol=row.quote_symbol,
        price=row.price,
        quantity=row.quantity,
        collateral_cid=row.collateral_cid,
        contract_id=row.contract_id,
        order_type=order_type,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderBookRepository:
    """Concrete repository — every operation is a single read-only PQS query."""

    def __init__(self, pqs: PqsClient) -> None:
        self._pqs = pqs

    async def list_tokens(self, owner: str) -> list[TokenInfo]:
        rows = await self._pqs.fetch_all(
            _LIST_TOKENS_SQL,
            {"template": DamlTemplate.TOKEN.value, "owner": owner},
            "list_tokens",
        )
        return [_row_to_token(row) for row in rows]

    async def list_buy_orders(
        self, base_symbol: str, quote_symbol: str
    ) -> list[OrderInfo]:
        rows = await self._pqs.fetch_all(
            _LIST_BUY_ORDERS_SQL,
            {
                "template": DamlTemplate.BUY_ORDER.value,
                "base_symbol": base_symbol,
                "quote_symbol": quote_symbol,
            },
            "list_buy_orders",
        )
        orders = [_row_to_order(row, OrderType.BUY) for row in rows]
        # Stable: equal prices keep store order
        orders.sort(key=lambda o: price_key(o.price), reverse=True)
        return orders

    async def list_sell_orders(
        self, base_symbol: str, quote_symbol: str
    ) -> list[OrderInfo]:
        rows = await self._pqs.fetch_all(
            _LIST_SELL_ORDERS_SQL,
            {
                "template": DamlTemplate.SELL_ORDER.value,
                "base_symbol": base_symbol,
                "quote_symbol": quote_symbol,
            },
            "list_sell_orders",
        )
        orders = [_row_to_order(row, OrderType.SELL) for row in rows]
        orders.sort(key=lambda o: price_key(o.price))
        return orders

    async def list_exchange_ids(self, limit: int) -> list[str]:
        rows = await self._pqs.fetch_all(
            _LIST_EXCHANGES_SQL,
            {"template": DamlTemplate.EXCHANGE.value, "limit": limit},
            "list_exchanges",
        )
        return [row.contract_id for row in rows]
