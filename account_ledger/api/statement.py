"""
Statement endpoints — deposits, withdrawals, balance, and
statement queries for the customer named by the ``cpf`` header.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from account_ledger.api.dependencies import (
    get_current_customer,
    get_statement_service,
)
from account_ledger.models.base import get_db
from account_ledger.models.customer import Customer
from account_ledger.services.statement_service import StatementService
from account_ledger.schemas.statement import (
    DepositRequest,
    WithdrawalRequest,
    OperationResponse,
)

router = APIRouter(tags=["Statement"])


@router.get("/statement", response_model=list[OperationResponse])
def get_statement(
    customer: Customer = Depends(get_current_customer),
    service: StatementService = Depends(get_statement_service),
):
    """All operations, oldest first."""
    return list(service.get_statement(customer))


@router.get("/statement/date", response_model=list[OperationResponse])
def get_statement_by_date(
    day: date = Query(alias="date"),
    customer: Customer = Depends(get_current_customer),
    service: StatementService = Depends(get_statement_service),
):
    """Operations created on the given calendar day (YYYY-MM-DD)."""
    return list(service.get_statement_by_date(customer, day))


@router.post("/deposit", status_code=201, response_class=Response)
def deposit(
    request: DepositRequest,
    customer: Customer = Depends(get_current_customer),
    service: StatementService = Depends(get_statement_service),
    db: Session = Depends(get_db),
):
    """Credit the account."""
    service.deposit(customer, request.amount, request.description)
    db.commit()
    return Response(status_code=201)


@router.post("/withdraw", status_code=201, response_class=Response)
def withdraw(
    request: WithdrawalRequest,
    customer: Customer = Depends(get_current_customer),
    service: StatementService = Depends(get_statement_service),
    db: Session = Depends(get_db),
):
    """Debit the account if the balance covers the amount."""
    service.withdraw(customer, request.amount)
    db.commit()
    return Response(status_code=201)


@router.get("/balance", response_model=float)
def get_balance(
    customer: Customer = Depends(get_current_customer),
    service: StatementService = Depends(get_statement_service),
):
    """Balance derived from the statement."""
    return float(service.get_balance(customer))
