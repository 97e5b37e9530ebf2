"""Error kinds raised by the CRM core.

Every failure derives from ``CrmError``. The three intermediate classes tell the
HTTP layer which status to use; the leaf classes carry the data needed to build
a useful message.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


class CrmError(Exception):
    """Base exception for all CRM errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(CrmError):
    """Raised when a lookup by id finds nothing."""

    pass


class BadRequestError(CrmError):
    """Raised when caller-supplied input is unusable."""

    pass


class EmptyResultError(CrmError):
    """Raised when a query has nothing to report."""

    pass


class SellerNotFoundError(NotFoundError):
    def __init__(self, seller_id: int) -> None:
        super().__init__(
            f"couldn't find seller with id: {seller_id}",
            {"seller_id": seller_id},
        )
        self.seller_id = seller_id


class TransactionNotFoundError(NotFoundError):
    def __init__(self, transaction_id: int) -> None:
        super().__init__(
            f"couldn't find transaction with id: {transaction_id}",
            {"transaction_id": transaction_id},
        )
        self.transaction_id = transaction_id


class ValidationFailedError(BadRequestError):
    """Raised with every violated field constraint of an entity."""

    def __init__(self, entity: str, violations: list) -> None:
        lines = "\n".join(f"Property: {v.field}, message: {v.message}" for v in violations)
        super().__init__(
            f"Validation failed for {entity}. Validation errors:\n{lines}",
            {"violations": [{"field": v.field, "message": v.message} for v in violations]},
        )
        self.entity = entity
        self.violations = violations


class InvalidPaymentTypeError(BadRequestError):
    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Got invalid payment type: {value}. Available types are: 'CARD', 'CASH', 'TRANSFER'",
            {"payment_type": value},
        )
        self.value = value


class MissingSellerReferenceError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("Seller ID must not be null for a transaction")


class InvalidPeriodTagError(BadRequestError):
    def __init__(self, tag: Any) -> None:
        super().__init__(
            f"Unexpected value: '{tag}'. Period has values: 'DAY', 'MONTH', 'QUARTER', 'YEAR'",
            {"period": str(tag)},
        )
        self.tag = tag


class NoTransactionsInPeriodError(EmptyResultError):
    def __init__(self, start: datetime, end: datetime) -> None:
        super().__init__(
            f"There were no transactions in the given period: {start.date()} to {end.date()}",
            {"start": start.isoformat(), "end": end.isoformat()},
        )
        self.start = start
        self.end = end


class SellerHasNoTransactionsError(EmptyResultError):
    def __init__(self, seller_id: int) -> None:
        super().__init__(
            f"Couldn't find the best day for seller with id: {seller_id} "
            "because it has zero transactions",
            {"seller_id": seller_id},
        )
        self.seller_id = seller_id
