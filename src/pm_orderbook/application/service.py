"""OrderBookApplicationService — composition layer over the PQS repository.

Reads only. The order-book view is two independent queries joined
all-or-nothing: if either side fails, the sibling is cancelled and the
failure propagates; a half book is never returned.

place_order performs the Exchange precondition check and returns a fixed
placeholder id. Submitting Exchange_CreateBuyOrder / Exchange_CreateSellOrder
to the Ledger API needs generated DAML bindings that this service does not have.
"""

import asyncio
import logging

from src.pm_common.errors import ExchangeNotFoundError
from src.pm_orderbook.application.schemas import (
    OrderInfoOut,
    PlaceOrderRequest,
    TokenInfoOut,
)
from src.pm_orderbook.domain.repository import OrderBookRepositoryProtocol

logger = logging.getLogger(__name__)

PLACEHOLDER_ORDER_ID = "placeholder-order-id"

# Fetch one extra so an ambiguous multi-exchange deployment gets logged.
_EXCHANGE_LOOKUP_LIMIT = 2


class OrderBookApplicationService:
    def __init__(self, repo: OrderBookRepositoryProtocol) -> None:
        self._repo = repo

    async def get_tokens(self, owner: str) -> list[TokenInfoOut]:
        tokens = await self._repo.list_tokens(owner)
        return [TokenInfoOut.from_domain(t) for t in tokens]

    async def get_order_book(
        self, base_symbol: str, quote_symbol: str
    ) -> list[OrderInfoOut]:
        try:
            async with asyncio.TaskGroup() as tg:
                buys = tg.create_task(self._repo.list_buy_orders(base_symbol, quote_symbol))
                sells = tg.create_task(self._repo.list_sell_orders(base_symbol, quote_symbol))
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None

        return [OrderInfoOut.from_domain(o) for o in (*buys.result(), *sells.result())]

    async def place_order(self, trader: str, req: PlaceOrderRequest) -> str:
        exchange_ids = await self._repo.list_exchange_ids(_EXCHANGE_LOOKUP_LIMIT)
        if not exchange_ids:
            raise ExchangeNotFoundError()
        if len(exchange_ids) > 1:
            logger.warning(
                "More than one active Exchange contract; using %s", exchange_ids[0]
            )

        logger.warning(
            "Order placement requires DAML ledger bindings - returning placeholder: "
            "trader=%s exchange=%s pair=%s/%s type=%s",
            trader,
            exchange_ids[0],
            req.base_symbol,
            req.quote_symbol,
            req.order_type,
        )
        return PLACEHOLDER_ORDER_ID
