"""
Seller <-> transaction link bookkeeping.

These functions are the only place where ``Transaction.seller_id`` and
``Seller.transaction_ids`` are written, so both sides always agree.
"""

from app.models import Seller, Transaction


def link(seller: Seller, txn: Transaction) -> None:
    if txn.id not in seller.transaction_ids:
        seller.transaction_ids.append(txn.id)
    txn.seller_id = seller.id


def unlink(seller: Seller, txn: Transaction) -> None:
    """Detach ``txn`` from ``seller``.

    Only valid as the first half of a relink or a delete: the caller must not
    leave the transaction without a seller.
    """
    if txn.id in seller.transaction_ids:
        seller.transaction_ids.remove(txn.id)
    txn.seller_id = None


def relink(old: Seller, new: Seller, txn: Transaction) -> None:
    unlink(old, txn)
    link(new, txn)
