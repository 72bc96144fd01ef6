"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from brokerage.config.settings import get_settings
from brokerage.config.logging_config import setup_logging
from brokerage.repositories.sqlalchemy.database import init_db, get_session
from brokerage.repositories.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerRepository,
)
from brokerage.api.deps import reset_quote_cache
from brokerage.api.routers import (
    accounts_router,
    trades_router,
    cash_router,
    broker_router,
    markets_router,
    admin_router,
)
from brokerage.core.exceptions import AppError
from brokerage.domain.models import Role
from brokerage.services import LedgerService

logger = logging.getLogger(__name__)


def ensure_admin_account() -> None:
    """Create the configured admin account if it does not exist yet."""
    settings = get_settings()
    if not settings.admin_account_id:
        return
    db = get_session()
    try:
        service = LedgerService(
            account_repo=SqlAlchemyAccountRepository(db),
            ledger_repo=SqlAlchemyLedgerRepository(db),
            uow=SqlAlchemyUnitOfWork(db),
        )
        service.ensure_account(settings.admin_account_id, settings.admin_name, Role.ADMIN.value)
        logger.info("Admin account %s ready", settings.admin_account_id)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    ensure_admin_account()
    yield
    # Shutdown
    reset_quote_cache()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Brokerage back office: ledger, trades, cash approvals and market data",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(trades_router)
app.include_router(cash_router)
app.include_router(broker_router)
app.include_router(markets_router)
app.include_router(admin_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
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
        "version": settings.app_version,
        "docs": "/docs",
    }
