"""
Statement operation model.

One credit (deposit) or debit (withdrawal) in a customer's
statement. Operations are immutable: once appended they are
never modified, and they are only removed together with the
customer that owns them.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base
from account_ledger.clock import utcnow
from account_ledger.models.enums import OperationType
from account_ledger.models.types import DecimalString


class Operation(Base):
    """
    An immutable entry in a statement.

    The autoincrement id doubles as the chronological position:
    statements are always read ordered by id, which is the order
    the operations were appended in.
    """

    __tablename__ = "operations"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_seq: Mapped[int] = mapped_column(
        ForeignKey("customers.seq", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[OperationType] = mapped_column(
        SAEnum(OperationType, name="operation_type_enum"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        DecimalString, nullable=False
    )
    # Only deposits carry a description
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    customer: Mapped["Customer"] = relationship(back_populates="statement")

    def __repr__(self) -> str:
        return f"<Operation {self.type.value} {self.amount}>"
