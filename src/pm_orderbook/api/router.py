"""pm_orderbook REST endpoints (mounted under /api).

GET  /orderbook/tokens   — caller's active token holdings (auth)
GET  /orderbook/orders   — active orders for a pair, buys then sells
POST /orderbook/orders   — place an order (auth; placeholder write path)
GET  /orderbook/health   — static liveness string, never touches PQS

Data endpoints answer any downstream failure with a bare 500. Details go to
the server log only, tagged with the party / pair that triggered them.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse

from src.pm_common.errors import AppError, InternalError
from src.pm_gateway.auth.dependencies import get_current_party
from src.pm_orderbook.application.schemas import (
    OrderInfoOut,
    PlaceOrderRequest,
    TokenInfoOut,
)
from src.pm_orderbook.application.service import OrderBookApplicationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orderbook", tags=["orderbook"])

HEALTH_MESSAGE = "OrderBook API is running"


def get_orderbook_service(request: Request) -> OrderBookApplicationService:
    """Service instance wired by create_app()."""
    return request.app.state.orderbook_service  # type: ignore[no-any-return]


def _server_error(request: Request, exc: Exception, msg: str, *args: object) -> Response:
    """Log a failed data request and answer with a bare 500.

    The request id matches the ``ob.request`` access-log line for the same call.
    """
    request_id = getattr(request.state, "request_id", "-")
    if isinstance(exc, AppError) and exc.is_precondition:
        logger.warning(
            msg + " [precondition %d] %s %s", *args, exc.code, exc.message, request_id
        )
    elif isinstance(exc, AppError):
        logger.error(
            msg + " [infrastructure %d] %s %s", *args, exc.code, exc.message, request_id
        )
    else:
        internal = InternalError()
        logger.exception(
            msg + " [internal %d] %s %s", *args, internal.code, type(exc).__name__, request_id
        )
    return Response(status_code=500)


@router.get("/tokens", response_model=list[TokenInfoOut])
async def get_tokens(
    request: Request,
    party: Annotated[str, Depends(get_current_party)],
    service: Annotated[OrderBookApplicationService, Depends(get_orderbook_service)],
) -> list[TokenInfoOut] | Response:
    logger.info("Getting tokens for party: %s", party)
    try:
        return await service.get_tokens(party)
    except Exception as exc:
        return _server_error(request, exc, "Error fetching tokens: party=%s", party)


@router.get("/orders", response_model=list[OrderInfoOut])
async def get_order_book(
    request: Request,
    service: Annotated[OrderBookApplicationService, Depends(get_orderbook_service)],
    base_symbol: str = Query(..., alias="baseSymbol", min_length=1),
    quote_symbol: str = Query(..., alias="quoteSymbol", min_length=1),
) -> list[OrderInfoOut] | Response:
    logger.info("Getting order book for %s/%s", base_symbol, quote_symbol)
    try:
        return await service.get_order_book(base_symbol, quote_symbol)
    except Exception as exc:
        return _server_error(
            request, exc, "Error fetching order book: pair=%s/%s", base_symbol, quote_symbol
        )


@router.post("/orders", response_model=str)
async def place_order(
    request: Request,
    req: PlaceOrderRequest,
    party: Annotated[str, Depends(get_current_party)],
    service: Annotated[OrderBookApplicationService, Depends(get_orderbook_service)],
) -> str | Response:
    logger.info(
        "Placing %s order for party %s on %s/%s @ %s x %s",
        req.order_type, party, req.base_symbol, req.quote_symbol, req.price, req.quantity,
    )
    try:
        return await service.place_order(party, req)
    except Exception as exc:
        return _server_error(
            request,
            exc,
            "Error placing order: party=%s pair=%s/%s",
            party, req.base_symbol, req.quote_symbol,
        )


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return HEALTH_MESSAGE
