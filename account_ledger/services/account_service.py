"""
Account service — the registry of customers.

Owns the set of customers, keeps the tax id unique, and
resolves the identity header of a request to a customer.
The caller controls the commit.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from account_ledger.exceptions import AccountNotFound, DuplicateAccount
from account_ledger.logging_config import get_logger
from account_ledger.models.customer import Customer
from account_ledger.schemas.account import AccountOpen, AccountUpdate

logger = get_logger("accounts")


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def _find(self, tax_id: str) -> Customer | None:
        return self.db.execute(
            select(Customer).where(Customer.tax_id == tax_id)
        ).scalar_one_or_none()

    def open_account(self, request: AccountOpen) -> Customer:
        """
        Register a new customer with an empty statement.

        Raises DuplicateAccount if the tax id is already taken.
        """
        if self._find(request.tax_id) is not None:
            logger.warning(
                "Rejected duplicate account",
                extra={"action": "open_account"},
            )
            raise DuplicateAccount()

        customer = Customer(tax_id=request.tax_id, name=request.name)
        self.db.add(customer)
        self.db.flush()

        logger.info(
            "Account opened",
            extra={"action": "open_account", "customer_id": customer.id},
        )
        return customer

    def resolve(self, tax_id: str | None) -> Customer:
        """
        Return the customer registered under ``tax_id``.

        Matching is exact and case-sensitive. Raises AccountNotFound
        when nothing matches, including when no tax id was sent.
        """
        customer = self._find(tax_id) if tax_id is not None else None
        if customer is None:
            raise AccountNotFound()
        return customer

    def update_name(self, tax_id: str, request: AccountUpdate) -> Customer:
        """Rename the account holder. The tax id never changes."""
        customer = self.resolve(tax_id)
        customer.name = request.name
        self.db.flush()

        logger.info(
            "Account renamed",
            extra={"action": "update_account", "customer_id": customer.id},
        )
        return customer

    def close_account(self, tax_id: str) -> list[Customer]:
        """
        Remove a customer together with its statement.

        Returns the customers that remain registered.
        """
        customer = self.resolve(tax_id)
        customer_id = customer.id
        self.db.delete(customer)
        self.db.flush()

        logger.info(
            "Account closed",
            extra={"action": "close_account", "customer_id": customer_id},
        )
        return self.list_customers()

    def list_customers(self) -> list[Customer]:
        """All customers, in registration order."""
        customers = self.db.execute(
            select(Customer).order_by(Customer.seq)
        ).scalars().all()
        return list(customers)

    def count(self) -> int:
        return self.db.execute(
            select(func.count()).select_from(Customer)
        ).scalar_one()
