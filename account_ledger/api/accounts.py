"""
Account endpoints.

The account is addressed by the ``cpf`` header, never by a path
parameter. Only opening an account works without it.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from account_ledger.api.dependencies import get_current_customer
from account_ledger.models.base import get_db
from account_ledger.models.customer import Customer
from account_ledger.services.account_service import AccountService
from account_ledger.schemas.account import (
    AccountOpen,
    AccountUpdate,
    CustomerResponse,
)

router = APIRouter(prefix="/account", tags=["Accounts"])


@router.post("", status_code=201, response_class=Response)
def open_account(
    request: AccountOpen,
    db: Session = Depends(get_db),
):
    """Open a new account. Fails if the tax id is already registered."""
    AccountService(db).open_account(request)
    db.commit()
    return Response(status_code=201)


@router.get(
    "",
    response_model=CustomerResponse,
    response_model_by_alias=True,
)
def get_account(customer: Customer = Depends(get_current_customer)):
    """Return the full customer record, statement included."""
    return customer


@router.put("", status_code=201, response_class=Response)
def update_account(
    request: AccountUpdate,
    customer: Customer = Depends(get_current_customer),
    db: Session = Depends(get_db),
):
    """Rename the account holder."""
    AccountService(db).update_name(customer.tax_id, request)
    db.commit()
    return Response(status_code=201)


@router.delete(
    "",
    response_model=list[CustomerResponse],
    response_model_by_alias=True,
)
def close_account(
    customer: Customer = Depends(get_current_customer),
    db: Session = Depends(get_db),
):
    """
    Close the account and discard its statement.

    Responds with the customers that are still registered.
    """
    remaining = AccountService(db).close_account(customer.tax_id)
    db.commit()
    return remaining
