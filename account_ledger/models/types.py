"""
Column types shared by the models.
"""

from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class DecimalString(TypeDecorator):
    """
    Stores a Decimal as its exact string form.

    SQLite has no decimal column: ``Numeric`` goes through a float
    and comes back rounded. Money must read back exactly as it was
    written, or the balance folded from it drifts.
    """

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
