"""Shared fixtures: an isolated store with a controllable clock."""

from datetime import datetime
from decimal import Decimal

import pytest

from app.models import SellerRequest, TransactionRequest
from app.sellers import create_seller
from app.store import DataStore
from app.transactions import create_transaction
from app.validation import EntityValidator


class FixedClock:
    """Stands in for ``datetime.now``; tests move ``now`` by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 9, 0))


@pytest.fixture
def store(clock) -> DataStore:
    return DataStore(clock=clock)


@pytest.fixture
def validator() -> EntityValidator:
    return EntityValidator()


@pytest.fixture
def make_seller(store, validator):
    def _make(name: str = "Test Seller", contact_info: str = "seller@example.com"):
        return create_seller(store, validator, SellerRequest(name=name, contact_info=contact_info))
    return _make


@pytest.fixture
def add_txn(store, validator, clock):
    """Create a transaction stamped at ``at`` through the regular create path."""
    def _add(seller_id: int, amount, at: datetime, payment_type: str = "CARD"):
        clock.now = at
        return create_transaction(store, validator, TransactionRequest(
            seller_id=seller_id,
            amount=Decimal(str(amount)),
            payment_type=payment_type,
        ))
    return _add
