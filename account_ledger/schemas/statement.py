"""
Pydantic schemas for statement operations.

Responses are frozen snapshots taken from the ORM rows, so a
caller holding one cannot reach back into the stored statement.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    field_serializer,
    field_validator,
)

from account_ledger.models.enums import OperationType


# Up to 15 integer digits and 4 decimal places
AMOUNT_MAX_DIGITS = 19
AMOUNT_DECIMAL_PLACES = 4


# --- Request Schemas ---

class AmountRequest(BaseModel):
    """Any request that moves money. Amount must be finite and >= 0."""
    amount: Decimal = Field(
        ge=0,
        allow_inf_nan=False,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )

    @field_validator("amount", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(v, bool):
            raise ValueError("amount must be a number")
        return v


class DepositRequest(AmountRequest):
    description: str | None = Field(default=None, max_length=255)


class WithdrawalRequest(AmountRequest):
    pass


# --- Response Schemas ---

class OperationResponse(BaseModel):
    """Single operation in API responses."""
    description: str | None
    amount: Decimal
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    type: OperationType

    model_config = {"from_attributes": True, "frozen": True}

    @field_serializer("amount")
    def amount_as_number(self, v: Decimal) -> float:
        return float(v)
