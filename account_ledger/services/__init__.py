"""Business logic services."""

from account_ledger.services.account_service import AccountService
from account_ledger.services.statement_service import StatementService

__all__ = ["AccountService", "StatementService"]
