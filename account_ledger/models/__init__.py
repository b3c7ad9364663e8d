"""
Database models package.

All models must be imported here so that they register on
Base.metadata before the tables are created.
"""

from account_ledger.models.base import Base, Database
from account_ledger.models.enums import OperationType
from account_ledger.models.customer import Customer
from account_ledger.models.operation import Operation

__all__ = [
    "Base",
    "Database",
    "OperationType",
    "Customer",
    "Operation",
]
