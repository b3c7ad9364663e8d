"""
Shared enumerations for database models.
"""

import enum


class OperationType(str, enum.Enum):
    """Direction of a statement operation."""
    CREDIT = "credit"
    DEBIT = "debit"
