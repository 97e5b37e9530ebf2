"""
Demo CRM data: a small book of sellers with one quarter of sales.

Four sellers sign up during Q4 2025 and then record 120 sales over Q1 2026.
Sales volume is skewed towards the first sellers so the analytics endpoints
have a clear winner, and amounts mix small counter sales with larger invoices.

The data goes through ``create_seller`` / ``create_transaction`` so links and
validation behave exactly as they do for API calls. The store's clock is
pointed at a prepared, ordered list of timestamps while seeding and restored
afterwards.
"""

import random
from datetime import datetime, timedelta
from decimal import Decimal

from app.models import PaymentType, SellerRequest, TransactionRequest
from app.sellers import create_seller
from app.store import DataStore
from app.transactions import create_transaction
from app.validation import EntityValidator

DEFAULT_SEED = 42

SIGNUP_WINDOW = (datetime(2025, 10, 1), datetime(2026, 1, 1))
SALES_WINDOW = (datetime(2026, 1, 1), datetime(2026, 4, 1))

# (name, contact, relative share of the quarter's sales)
DEMO_SELLERS = [
    ("Northwind Traders", "sales@northwind.example", 5),
    ("Blue Harbor Supplies", "orders@blueharbor.example", 3),
    ("Acme Office Goods", "+1 555 0142", 2),
    ("Greenfield Farm Market", "hello@greenfield.example", 1),
]

SALES_COUNT = 120

# most sales are small; one in five is an invoice-sized amount
SMALL_SALE = (Decimal("5.00"), Decimal("250.00"))
LARGE_SALE = (Decimal("250.00"), Decimal("2500.00"))


def _instant_in(rng: random.Random, window: tuple[datetime, datetime]) -> datetime:
    lo, hi = window
    seconds = int((hi - lo).total_seconds()) - 1
    return lo + timedelta(seconds=rng.randint(0, seconds))


def _sale_amount(rng: random.Random) -> Decimal:
    lo, hi = LARGE_SALE if rng.random() < 0.2 else SMALL_SALE
    cents = rng.randint(int(lo * 100), int(hi * 100))
    return Decimal(cents) / 100


def seed(store: DataStore, random_seed: int = DEFAULT_SEED) -> None:
    rng = random.Random(random_seed)
    validator = EntityValidator()
    store_clock = store.clock

    signups = sorted(_instant_in(rng, SIGNUP_WINDOW) for _ in DEMO_SELLERS)
    sales = sorted(_instant_in(rng, SALES_WINDOW) for _ in range(SALES_COUNT))
    try:
        store.clock = iter(signups).__next__
        seller_ids = [
            create_seller(store, validator, SellerRequest(name=name, contact_info=contact)).id
            for name, contact, _ in DEMO_SELLERS
        ]
        shares = [share for _, _, share in DEMO_SELLERS]

        store.clock = iter(sales).__next__
        for _ in sales:
            create_transaction(store, validator, TransactionRequest(
                seller_id=rng.choices(seller_ids, weights=shares)[0],
                amount=_sale_amount(rng),
                payment_type=rng.choice(list(PaymentType)).value,
            ))
    finally:
        store.clock = store_clock
