"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockscope.api.routers import (
    alerts_router,
    data_router,
    market_router,
    portfolio_router,
    watchlist_router,
)
from stockscope.app_context import AppContext
from stockscope.config.logging_config import setup_logging
from stockscope.config.settings import get_settings
from stockscope.core.exceptions import AppError

ERROR_STATUS = {
    "INVALID_INPUT": 400,
    "NOT_FOUND": 404,
    "IMPORT_ERROR": 400,
    "FEED_UNAVAILABLE": 503,
    "PERSISTENCE_FAILURE": 503,
}


def create_app(context_factory: Optional[Callable[[], AppContext]] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        context_factory: Builds the AppContext on startup; defaults to one
            configured from the process settings.
    """
    settings = get_settings()
    factory = context_factory or (lambda: AppContext(get_settings()))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging()
        context = factory()
        app.state.context = context
        context.start()
        yield
        # Shutdown
        await context.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="Local-first stock portfolio tracking and price alerts",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(portfolio_router)
    app.include_router(alerts_router)
    app.include_router(watchlist_router)
    app.include_router(market_router)
    app.include_router(data_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(exc.code, 400),
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn; port from STOCKSCOPE_PORT (default 8001)."""
    port = int(os.environ.get("STOCKSCOPE_PORT", "8001"))
    uvicorn.run(app, host="127.0.0.1", port=port)


if __name__ == "__main__":
    run()
