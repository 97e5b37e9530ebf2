"""
Conversions between request/response models and entities.

Entities are built with ``model_construct`` so that bad values reach the
validator (which reports all of them) instead of failing one at a time here.
The one exception is the payment type, whose string-to-enum parse is its own
error kind.
"""

from typing import Optional

from app.exceptions import InvalidPaymentTypeError
from app.models import (
    PaymentType,
    Seller,
    SellerRequest,
    SellerResponse,
    Transaction,
    TransactionRequest,
    TransactionResponse,
)


def parse_payment_type(value: Optional[str]) -> Optional[PaymentType]:
    """``None`` passes through (the validator reports it as missing)."""
    if value is None:
        return None
    try:
        return PaymentType(value)
    except ValueError:
        raise InvalidPaymentTypeError(value) from None


# ── sellers ──────────────────────────────────────────────────────────────────

def to_seller_entity(request: SellerRequest) -> Seller:
    return Seller.model_construct(name=request.name, contact_info=request.contact_info)


def apply_seller_update(request: SellerRequest, seller: Seller) -> None:
    for field in request.model_fields_set:
        setattr(seller, field, getattr(request, field))


def to_seller_response(seller: Seller) -> SellerResponse:
    return SellerResponse(
        id=seller.id,
        name=seller.name,
        contact_info=seller.contact_info,
        registration_date=seller.registration_date,
    )


# ── transactions ─────────────────────────────────────────────────────────────

def to_transaction_entity(request: TransactionRequest) -> Transaction:
    """Build an unlinked transaction; ``seller_id`` is set when it is linked."""
    return Transaction.model_construct(
        seller_id=None,
        amount=request.amount,
        payment_type=parse_payment_type(request.payment_type),
    )


def apply_transaction_update(request: TransactionRequest, txn: Transaction) -> None:
    """Copy the sent amount / payment type onto ``txn``.

    ``seller_id`` is left alone; moving a transaction goes through app.relations.
    """
    fields = request.model_fields_set
    if "payment_type" in fields:
        txn.payment_type = parse_payment_type(request.payment_type)
    if "amount" in fields:
        txn.amount = request.amount


def to_transaction_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=txn.id,
        seller_id=txn.seller_id,
        amount=txn.amount,
        payment_type=txn.payment_type,
        transaction_date=txn.transaction_date,
    )
