"""
Pydantic schemas for customer account operations.

The wire name of the tax id is ``cpf``; ``taxId`` is accepted
on input as well. Timestamps go out as ``createdAt``.
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from account_ledger.schemas.statement import OperationResponse


# --- Request Schemas ---

class AccountOpen(BaseModel):
    """Request to open a new account."""
    tax_id: str = Field(
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices("cpf", "taxId", "tax_id"),
    )
    name: str = Field(min_length=1, max_length=255)


class AccountUpdate(BaseModel):
    """Request to rename an account holder."""
    name: str = Field(min_length=1, max_length=255)


# --- Response Schemas ---

class CustomerResponse(BaseModel):
    id: uuid.UUID
    name: str
    tax_id: str = Field(
        validation_alias=AliasChoices("tax_id", "cpf"),
        serialization_alias="cpf",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    statement: list[OperationResponse]

    model_config = {"from_attributes": True, "frozen": True}
