"""
Transformation Layer Schemas

Polars schemas for donation frames and pydantic models for the records
handed to the payment gateway.
"""

from typing import Optional

import polars as pl
from pydantic import BaseModel, Field

# Column order matches the CSV layout
DONATIONS_SCHEMA = pl.Schema(
    [
        ("name", pl.String()),
        ("amount_subunits", pl.Int64()),
        ("card_number", pl.String()),
        ("cvv", pl.String()),
        ("expiration_month", pl.Int64()),
        ("expiration_year", pl.Int64()),
    ]
)

CHARGE_RESULTS_SCHEMA = pl.Schema(
    [
        ("name", pl.String()),
        ("amount_subunits", pl.Int64()),
        ("success", pl.Boolean()),
    ]
)


class Donation(BaseModel):
    """One donation row from the decoded CSV"""

    name: str = Field(..., description="Donor name as printed on the card")
    amount_subunits: int = Field(
        ..., description="Amount in minor currency units (satang for THB)"
    )
    card_number: str = Field(..., description="Card number")
    cvv: str = Field(..., description="Card security code")
    expiration_month: int = Field(..., description="Card expiry month (1-12)")
    expiration_year: int = Field(..., description="Card expiry year")

    @property
    def masked_card_number(self) -> str:
        """Card number safe for logging: last four digits only"""
        tail = self.card_number[-4:]
        return f"{'*' * max(len(self.card_number) - 4, 0)}{tail}"

    def __repr__(self) -> str:
        return (
            f"Donation(name={self.name!r}, amount_subunits={self.amount_subunits}, "
            f"card_number={self.masked_card_number!r})"
        )

    __str__ = __repr__


class ChargeResult(BaseModel):
    """Outcome of charging a single donation"""

    donation: Donation
    success: bool
    charge_id: Optional[str] = Field(None, description="Gateway charge id on success")
    error: Optional[str] = Field(None, description="Failure reason on error")
