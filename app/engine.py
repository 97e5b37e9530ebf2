from collections import Counter, defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from app.exceptions import NoTransactionsInPeriodError, SellerHasNoTransactionsError
from app.log import get_logger
from app.models import PeriodType, Seller
from app.periods import resolve_period
from app.sellers import find_seller
from app.store import DataStore

logger = get_logger("litecrm.engine")

_ZERO = Decimal("0")


def _totals_by_seller(store: DataStore, start: datetime, end: datetime) -> dict[int, Decimal]:
    """Summed amount per seller over ``[start, end)``; sellers without
    transactions in the range are absent."""
    totals: dict[int, Decimal] = defaultdict(lambda: _ZERO)
    for txn in store.transactions_between(start, end):
        totals[txn.seller_id] += txn.amount
    return dict(totals)


def get_top_seller(
    store: DataStore,
    period: Union[PeriodType, str],
    reference: datetime,
) -> Seller:
    """Seller with the largest summed amount in the period bucket around
    ``reference``. Equal sums go to the lowest seller id."""
    logger.info("calculating top seller for period: %s and reference date: %s", period, reference)
    start, end = resolve_period(period, reference)

    with store.reading():
        totals = _totals_by_seller(store, start, end)
        if not totals:
            raise NoTransactionsInPeriodError(start, end)

        seller_id, total = min(totals.items(), key=lambda item: (-item[1], item[0]))
        top = store.get_seller(seller_id).model_copy(deep=True)
    logger.info(
        "successfully found top seller %s with total %s in [%s, %s)",
        seller_id,
        total,
        start,
        end,
    )
    return top


def get_sellers_below_threshold(
    store: DataStore,
    threshold: Decimal,
    start: datetime,
    end: datetime,
) -> list[Seller]:
    """Sellers whose summed amount in ``[start, end)`` is strictly below
    ``threshold``, ordered by id. Only sellers with at least one transaction
    in the range are considered."""
    logger.info(
        "finding sellers with total below %s in the period %s to %s",
        threshold,
        start,
        end,
    )
    with store.reading():
        totals = _totals_by_seller(store, start, end)
        sellers = [
            store.get_seller(seller_id).model_copy(deep=True)
            for seller_id, total in sorted(totals.items())
            if total < threshold
        ]
    logger.info("found %d sellers with total below %s", len(sellers), threshold)
    return sellers


def get_best_day(store: DataStore, seller_id: int) -> date:
    """Calendar date with the most transactions for the seller, over all time.
    Equal counts go to the earliest date."""
    logger.info("calculating best day for seller: %s", seller_id)
    with store.reading():
        find_seller(store, seller_id)
        counts = Counter(t.transaction_date.date() for t in store.get_transactions_for_seller(seller_id))
    if not counts:
        raise SellerHasNoTransactionsError(seller_id)

    best_day, count = min(counts.items(), key=lambda item: (-item[1], item[0]))
    logger.info("best day for seller %s is %s with %d transactions", seller_id, best_day, count)
    return best_day
