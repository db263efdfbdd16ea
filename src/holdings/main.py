"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from holdings import __version__
from holdings.config.settings import get_settings
from holdings.config.logging_config import setup_logging
from holdings.repositories.sqlalchemy.database import init_db
from holdings.api.routers import (
    accounts_router,
    holdings_router,
    positions_router,
    securities_router,
    transactions_router,
)
from holdings.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    logger.info("Holdings service started")
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Current holdings, cost basis and unrealized P&L per account",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(holdings_router)
app.include_router(transactions_router)
app.include_router(securities_router)
app.include_router(accounts_router)
app.include_router(positions_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
