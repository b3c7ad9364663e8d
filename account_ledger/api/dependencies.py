"""
Request-scoped dependencies shared by the routers.
"""

from datetime import tzinfo

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from account_ledger.models.base import get_db
from account_ledger.models.customer import Customer
from account_ledger.services.account_service import AccountService
from account_ledger.services.statement_service import StatementService


def get_current_customer(
    cpf: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Customer:
    """
    Resolve the ``cpf`` header to a registered customer.

    Runs before every identity-gated endpoint. FastAPI caches
    get_db per request, so the endpoint sees the same session
    and the same customer object.
    """
    return AccountService(db).resolve(cpf)


def get_statement_timezone(request: Request) -> tzinfo:
    """Return the zone the lifespan resolved from the settings."""
    return request.app.state.statement_timezone


def get_statement_service(
    db: Session = Depends(get_db),
    tz: tzinfo = Depends(get_statement_timezone),
) -> StatementService:
    return StatementService(db, tz)
