"""
Customer model.

Represents an account holder, looked up by tax id (cpf).
Each customer owns an append-only statement of operations.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base
from account_ledger.clock import utcnow


class Customer(Base):
    __tablename__ = "customers"

    # Insertion order of customers, used for listings
    seq: Mapped[int] = mapped_column(primary_key=True)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Compared verbatim: no trimming, no case folding
    tax_id: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    # Closing the account deletes its statement with it
    statement: Mapped[list["Operation"]] = relationship(
        back_populates="customer",
        order_by="Operation.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Customer {self.id} {self.name}>"
