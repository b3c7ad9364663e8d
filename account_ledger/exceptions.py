"""
Domain errors raised by the ledger services.

Every error carries the short message that is sent back to the
client. They subclass ValueError so callers that only care about
"a business rule was violated" can keep catching ValueError.
"""


class LedgerError(ValueError):
    """Base class for rule violations reported to the caller."""

    status_code: int = 400
    message: str = "Request rejected!"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class AccountNotFound(LedgerError):
    message = "Customer not found!"


class DuplicateAccount(LedgerError):
    message = "Customer already exists!"


class InsufficientFunds(LedgerError):
    # Wording kept byte-for-byte for existing clients
    message = "Insufficient found!"


class InvalidAmount(LedgerError):
    message = "Invalid amount!"
