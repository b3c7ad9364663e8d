"""
Statement service — deposits, withdrawals, and statement views.

The rules it enforces:
1. Amounts are finite and never negative
2. Operations are append-only; nothing is edited or removed
3. A withdrawal never takes the balance below zero

The balance is never stored. It is folded from the statement
every time it is needed, so it cannot drift from the entries.
The caller controls the commit.
"""

from datetime import date, timezone, tzinfo
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from account_ledger.clock import local_day, utcnow
from account_ledger.exceptions import InsufficientFunds, InvalidAmount
from account_ledger.logging_config import get_logger
from account_ledger.models.customer import Customer
from account_ledger.models.enums import OperationType
from account_ledger.models.operation import Operation
from account_ledger.schemas.statement import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    OperationResponse,
)

logger = get_logger("statement")


def validate_amount(amount) -> Decimal:
    """
    Coerce ``amount`` to a Decimal, or raise InvalidAmount.

    Accepts ints, floats, Decimals and numeric strings. Rejects
    booleans, NaN, infinities, negative values, and anything with
    more than 4 decimal places or 15 integer digits.
    """
    if isinstance(amount, bool):
        raise InvalidAmount()
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount()
    if not value.is_finite() or value < 0:
        raise InvalidAmount()

    # Same digit limits the request schema applies
    _, digits, exponent = value.normalize().as_tuple()
    if exponent >= 0:
        places, whole = 0, len(digits) + exponent
    else:
        places = -exponent
        whole = max(len(digits) - places, 0)
    if (
        places > AMOUNT_DECIMAL_PLACES
        or whole > AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES
    ):
        raise InvalidAmount()
    return value


def fold_balance(statement: list[Operation]) -> Decimal:
    """Credits add, debits subtract."""
    balance = Decimal("0")
    for operation in statement:
        if operation.type == OperationType.CREDIT:
            balance += operation.amount
        else:
            balance -= operation.amount
    return balance


class StatementService:

    def __init__(self, db: Session, tz: tzinfo = timezone.utc):
        # The API passes the zone resolved once at startup
        self.db = db
        self.tz = tz

    def _append(
        self,
        customer: Customer,
        op_type: OperationType,
        amount: Decimal,
        description: str | None = None,
    ) -> Operation:
        operation = Operation(
            type=op_type,
            amount=amount,
            description=description,
            created_at=utcnow(),
        )
        customer.statement.append(operation)
        self.db.flush()
        return operation

    def deposit(
        self,
        customer: Customer,
        amount,
        description: str | None = None,
    ) -> Operation:
        """Append a credit. There is no upper bound on deposits."""
        value = validate_amount(amount)
        operation = self._append(
            customer, OperationType.CREDIT, value, description
        )

        logger.info(
            "Deposit recorded",
            extra={
                "action": "deposit",
                "customer_id": customer.id,
                "amount": str(value),
            },
        )
        return operation

    def withdraw(self, customer: Customer, amount) -> Operation:
        """
        Append a debit if the balance covers it.

        Withdrawing exactly the balance is allowed and leaves zero.
        """
        value = validate_amount(amount)
        balance = fold_balance(customer.statement)
        if value > balance:
            logger.warning(
                "Withdrawal exceeds balance",
                extra={
                    "action": "withdraw",
                    "customer_id": customer.id,
                    "amount": str(value),
                },
            )
            raise InsufficientFunds()

        operation = self._append(customer, OperationType.DEBIT, value)

        logger.info(
            "Withdrawal recorded",
            extra={
                "action": "withdraw",
                "customer_id": customer.id,
                "amount": str(value),
            },
        )
        return operation

    def get_balance(self, customer: Customer) -> Decimal:
        return fold_balance(customer.statement)

    def get_statement(
        self, customer: Customer
    ) -> tuple[OperationResponse, ...]:
        """The full statement, oldest first, as read-only snapshots."""
        return tuple(
            OperationResponse.model_validate(op) for op in customer.statement
        )

    def get_statement_by_date(
        self, customer: Customer, day: date
    ) -> tuple[OperationResponse, ...]:
        """
        Operations created on ``day``.

        Both sides are compared as calendar days in the configured
        zone; time of day is ignored. Statement order is kept.
        """
        return tuple(
            OperationResponse.model_validate(op)
            for op in customer.statement
            if local_day(op.created_at, self.tz) == day
        )
