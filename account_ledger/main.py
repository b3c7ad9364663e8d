"""
Account Ledger Service — FastAPI Application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from account_ledger.api.accounts import router as accounts_router
from account_ledger.api.health import router as health_router
from account_ledger.api.statement import router as statement_router
from account_ledger.clock import resolve_timezone
from account_ledger.config import get_settings
from account_ledger.exceptions import InvalidAmount, LedgerError
from account_ledger.logging_config import get_logger, setup_logging
from account_ledger.models.base import Database

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = get_logger("app")

INVALID_REQUEST = "Invalid request!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create the in-memory store when the app starts.

    Each start gets an empty ledger; nothing survives a restart.
    """
    # Resolved once; an unknown zone fails here, not on a request
    app.state.statement_timezone = resolve_timezone(settings.STATEMENT_TIMEZONE)

    database = Database()
    database.create_all()
    app.state.database = database
    logger.info("Ledger store ready", extra={"action": "startup"})
    try:
        yield
    finally:
        database.dispose()
        logger.info("Ledger store discarded", extra={"action": "shutdown"})


async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400 with the same error shape as rule violations."""
    amount_error = any(
        tuple(error.get("loc", ()))[-1:] == ("amount",)
        for error in exc.errors()
    )
    message = InvalidAmount.message if amount_error else INVALID_REQUEST
    logger.warning(
        message,
        extra={"action": "validate", "path": request.url.path},
    )
    return JSONResponse(status_code=400, content={"error": message})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="In-memory customer accounts with deposits, "
                    "withdrawals and statements",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Register routers
    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(statement_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "account_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
