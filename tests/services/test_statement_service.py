"""
Tests for the StatementService — deposits, withdrawals,
balance, and statement views.
"""

import random
from datetime import date, datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from account_ledger.exceptions import InsufficientFunds, InvalidAmount
from account_ledger.models.enums import OperationType
from account_ledger.services.account_service import AccountService
from account_ledger.services.statement_service import (
    StatementService,
    fold_balance,
    validate_amount,
)
from account_ledger.schemas.account import AccountOpen


def make_customer(db_session, tax_id="123"):
    customer = AccountService(db_session).open_account(
        AccountOpen(cpf=tax_id, name="Ana")
    )
    db_session.commit()
    return customer


def freeze_clock(monkeypatch, moment):
    """Pin the time stamped on new operations (naive UTC)."""
    monkeypatch.setattr(
        "account_ledger.services.statement_service.utcnow",
        lambda: moment,
    )


# --- Deposit Tests ---

class TestDeposit:

    def test_deposit_appends_credit(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)

        operation = service.deposit(customer, Decimal("100"), "salary")
        db_session.commit()

        assert operation.type == OperationType.CREDIT
        assert operation.amount == Decimal("100")
        assert operation.description == "salary"
        assert operation.created_at is not None
        assert len(customer.statement) == 1

    def test_deposit_without_description(self, db_session):
        customer = make_customer(db_session)
        operation = StatementService(db_session).deposit(customer, 5)
        assert operation.description is None

    def test_large_deposit_accepted(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, Decimal("999999999999.99"))
        assert service.get_balance(customer) == Decimal("999999999999.99")

    @pytest.mark.parametrize(
        "amount", [-1, Decimal("-0.01"), float("nan"), float("inf"), "abc", None, True]
    )
    def test_invalid_amount_rejected(self, db_session, amount):
        customer = make_customer(db_session)
        service = StatementService(db_session)

        with pytest.raises(InvalidAmount):
            service.deposit(customer, amount)
        assert customer.statement == []


# --- Withdrawal Tests ---

class TestWithdraw:

    def test_withdraw_appends_debit(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, 100)

        operation = service.withdraw(customer, 40)
        db_session.commit()

        assert operation.type == OperationType.DEBIT
        assert operation.description is None
        assert service.get_balance(customer) == Decimal("60")

    def test_insufficient_funds_rejected(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, 100)
        db_session.commit()

        with pytest.raises(InsufficientFunds):
            service.withdraw(customer, Decimal("100.01"))

        assert len(customer.statement) == 1
        assert service.get_balance(customer) == Decimal("100")

    def test_withdraw_from_empty_account_rejected(self, db_session):
        customer = make_customer(db_session)
        with pytest.raises(InsufficientFunds):
            StatementService(db_session).withdraw(customer, 1)

    def test_withdraw_exact_balance_leaves_zero(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, Decimal("75.50"))

        service.withdraw(customer, Decimal("75.50"))

        assert service.get_balance(customer) == Decimal("0")

    def test_invalid_amount_checked_before_balance(self, db_session):
        customer = make_customer(db_session)
        with pytest.raises(InvalidAmount):
            StatementService(db_session).withdraw(customer, -10)


# --- Balance Tests ---

class TestBalance:

    def test_empty_statement_balance_is_zero(self, db_session):
        customer = make_customer(db_session)
        assert StatementService(db_session).get_balance(customer) == Decimal("0")

    def test_balance_matches_fold_and_never_negative(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        rng = random.Random(7)

        for _ in range(60):
            amount = Decimal(rng.randint(0, 5000)) / 100
            if rng.random() < 0.5:
                service.deposit(customer, amount)
            else:
                try:
                    service.withdraw(customer, amount)
                except InsufficientFunds:
                    pass
            assert service.get_balance(customer) >= 0

        credits = sum(
            op.amount for op in customer.statement
            if op.type == OperationType.CREDIT
        )
        debits = sum(
            op.amount for op in customer.statement
            if op.type == OperationType.DEBIT
        )
        assert service.get_balance(customer) == credits - debits

    def test_fold_balance(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, 10)
        service.deposit(customer, 5)
        service.withdraw(customer, 12)

        assert fold_balance(customer.statement) == Decimal("3")


# --- Statement Tests ---

class TestStatement:

    def test_statement_preserves_order(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, 100)
        service.withdraw(customer, 40)
        service.deposit(customer, 1)
        db_session.commit()

        statement = service.get_statement(customer)

        assert [(op.type, op.amount) for op in statement] == [
            (OperationType.CREDIT, Decimal("100")),
            (OperationType.DEBIT, Decimal("40")),
            (OperationType.CREDIT, Decimal("1")),
        ]

    def test_statement_is_read_only(self, db_session):
        customer = make_customer(db_session)
        service = StatementService(db_session)
        service.deposit(customer, 100)

        statement = service.get_statement(customer)

        assert isinstance(statement, tuple)
        with pytest.raises(ValidationError):
            statement[0].amount = Decimal("1000000")
        assert service.get_balance(customer) == Decimal("100")


class TestStatementByDate:

    def test_filters_by_calendar_day(self, db_session, monkeypatch):
        customer = make_customer(db_session)
        service = StatementService(db_session, tz=timezone.utc)

        freeze_clock(monkeypatch, datetime(2024, 3, 9, 23, 59))
        service.deposit(customer, 1, "late")
        freeze_clock(monkeypatch, datetime(2024, 3, 10, 0, 0))
        service.deposit(customer, 2, "midnight")
        freeze_clock(monkeypatch, datetime(2024, 3, 10, 18, 30))
        service.withdraw(customer, 1)
        freeze_clock(monkeypatch, datetime(2024, 3, 11, 8, 0))
        service.deposit(customer, 4, "next day")

        result = service.get_statement_by_date(customer, date(2024, 3, 10))

        assert [(op.type, op.amount) for op in result] == [
            (OperationType.CREDIT, Decimal("2")),
            (OperationType.DEBIT, Decimal("1")),
        ]

    def test_day_without_operations_is_empty(self, db_session, monkeypatch):
        customer = make_customer(db_session)
        service = StatementService(db_session, tz=timezone.utc)
        freeze_clock(monkeypatch, datetime(2024, 3, 10, 12, 0))
        service.deposit(customer, 1)

        assert service.get_statement_by_date(customer, date(2024, 3, 12)) == ()

    def test_day_follows_configured_zone(self, db_session, monkeypatch):
        """02:00 UTC on the 10th is still the 9th in Sao Paulo (UTC-3)."""
        customer = make_customer(db_session)
        service = StatementService(db_session, tz=ZoneInfo("America/Sao_Paulo"))
        freeze_clock(monkeypatch, datetime(2024, 3, 10, 2, 0))
        service.deposit(customer, 1)

        assert len(service.get_statement_by_date(customer, date(2024, 3, 9))) == 1
        assert service.get_statement_by_date(customer, date(2024, 3, 10)) == ()


# --- Amount Validation ---

class TestValidateAmount:

    @pytest.mark.parametrize("raw,expected", [
        (0, Decimal("0")),
        (10, Decimal("10")),
        (2.5, Decimal("2.5")),
        ("3.10", Decimal("3.10")),
        ("0.0001", Decimal("0.0001")),
        ("25.50000", Decimal("25.5")),
        ("123456789012345.1234", Decimal("123456789012345.1234")),
        (Decimal("1E+3"), Decimal("1000")),
        (Decimal("7"), Decimal("7")),
    ])
    def test_valid_amounts(self, raw, expected):
        assert validate_amount(raw) == expected

    @pytest.mark.parametrize("raw", [
        -0.5, "nan", "Infinity", "", [], False,
        "0.00004",
        "1234567890123456",
        Decimal("12345678901234567.00"),
        1e16,
    ])
    def test_invalid_amounts(self, raw):
        with pytest.raises(InvalidAmount):
            validate_amount(raw)


# --- Storage Precision ---

class TestStoredAmounts:

    @pytest.mark.parametrize("amount", [
        Decimal("0.0001"),
        Decimal("123456789012345.1234"),
        Decimal("0.3"),
    ])
    def test_amount_reads_back_exactly(self, database, amount):
        """A fresh session reloads the same Decimal that was written."""
        with database.session() as session:
            customer = make_customer(session)
            StatementService(session).deposit(customer, amount)
            session.commit()
            customer_id = customer.id

        with database.session() as session:
            customer = AccountService(session).resolve("123")
            assert customer.id == customer_id
            assert customer.statement[0].amount == amount
            assert StatementService(session).get_balance(customer) == amount

    def test_exact_withdrawal_after_reload(self, database):
        with database.session() as session:
            customer = make_customer(session)
            service = StatementService(session)
            service.deposit(customer, Decimal("0.1"))
            service.deposit(customer, Decimal("0.2"))
            session.commit()

        with database.session() as session:
            customer = AccountService(session).resolve("123")
            service = StatementService(session)
            service.withdraw(customer, Decimal("0.3"))
            assert service.get_balance(customer) == Decimal("0")
