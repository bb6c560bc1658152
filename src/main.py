"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8080
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from config.settings import settings
from src.pm_common.database import create_pqs_engine
from src.pm_common.errors import AppError
from src.pm_common.pqs import PqsClient
from src.pm_common.response import error_response
from src.pm_gateway.middleware.request_log import RequestLogMiddleware
from src.pm_orderbook.api.router import router as orderbook_router
from src.pm_orderbook.application.service import OrderBookApplicationService
from src.pm_orderbook.infrastructure.persistence import OrderBookRepository

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    pqs: PqsClient | None = None,
    service: OrderBookApplicationService | None = None,
) -> FastAPI:
    """Wire PQS client → repository → service and register routes.

    Tests pass a fake ``service`` (and optionally ``pqs``) to avoid a database.
    """
    pqs = pqs or PqsClient(create_pqs_engine())
    service = service or OrderBookApplicationService(OrderBookRepository(pqs))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: log PQS reachability (never fatal). Shutdown: dispose pool."""
        try:
            await pqs.ping()
        except AppError as exc:
            logger.warning("PQS not reachable at startup: %s", exc.message)
        yield
        await pqs.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.pqs = pqs
    app.state.orderbook_service = service

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> Response:
        if exc.http_status >= 500:
            logger.error("Unhandled %s: %s", type(exc).__name__, exc.message)
            return Response(status_code=exc.http_status)
        resp = error_response(
            exc.code, exc.message, getattr(request.state, "request_id", None)
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
            headers=headers,
        )

    app.include_router(orderbook_router, prefix="/api")

    @app.get("/ready")
    async def ready() -> JSONResponse:
        """Readiness probe: PQS must answer SELECT 1."""
        try:
            await app.state.pqs.ping()
        except AppError as exc:
            logger.warning("Readiness check failed: %s", exc.message)
            return JSONResponse(
                status_code=503,
                content={"status": "not ready", "checks": {"database": "unavailable"}},
            )
        return JSONResponse(content={"status": "ready", "checks": {"database": "ok"}})

    return app


configure_logging()
app = create_app()
