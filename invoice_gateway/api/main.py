"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from invoice_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from invoice_gateway.api.v1 import auth, customers, dashboard, invoices
from invoice_gateway.domain.exceptions import DataAccessError, NotFoundError
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.observability.logging import setup_logging
from invoice_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    The Database client is created at startup and disposed at shutdown unless
    one is injected, in which case the caller owns its lifecycle.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = database is None
        app.state.database = Database.from_settings(settings) if owned else database
        logging.info("Database client ready", extra={"owned": owned})
        try:
            yield
        finally:
            if owned:
                await app.state.database.dispose()

    app = FastAPI(
        title="Invoice Gateway",
        description="Read-only invoicing data and credential checks",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(DataAccessError)
    async def data_access_error_handler(request: Request, exc: DataAccessError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; dashboard before invoices so /invoices/latest wins over /invoices/{id}
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(invoices.router, prefix="/v1", tags=["invoices"])
    app.include_router(customers.router, prefix="/v1", tags=["customers"])
    app.include_router(auth.router, prefix="/v1", tags=["auth"])

    return app


app = create_app()
