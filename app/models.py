from pydantic import BaseModel, Field, field_validator
from enum import Enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


class PaymentType(str, Enum):
    CARD = "CARD"
    CASH = "CASH"
    TRANSFER = "TRANSFER"


class PeriodType(str, Enum):
    DAY = "DAY"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"


# ── Entities ─────────────────────────────────────────────────────────────────
# id and the *_date fields are assigned by the DataStore on insert.

class Seller(BaseModel):
    id: Optional[int] = None
    name: str = Field(min_length=2, max_length=255)
    contact_info: str = Field(max_length=255)
    registration_date: Optional[datetime] = None
    # owned side of the relationship, in link order
    transaction_ids: list[int] = Field(default_factory=list)

    @field_validator("name", "contact_info")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class Transaction(BaseModel):
    id: Optional[int] = None
    seller_id: int  # back reference, written only by app.relations
    amount: Decimal = Field(ge=0)
    payment_type: PaymentType
    transaction_date: Optional[datetime] = None


# ── Request models ───────────────────────────────────────────────────────────
# Every field is optional so the same shape serves create and partial update.
# Fields the caller did not send are absent from ``model_fields_set``.

class SellerRequest(BaseModel):
    name: Optional[str] = None
    contact_info: Optional[str] = None


class TransactionRequest(BaseModel):
    seller_id: Optional[int] = None
    amount: Optional[Decimal] = None
    payment_type: Optional[str] = None  # parsed into PaymentType by app.mappers


# ── Response models ──────────────────────────────────────────────────────────

class SellerResponse(BaseModel):
    id: int
    name: str
    contact_info: str
    registration_date: datetime


class TransactionResponse(BaseModel):
    id: int
    seller_id: int
    amount: Decimal
    payment_type: PaymentType
    transaction_date: datetime


class BestDayResponse(BaseModel):
    best_day: date
