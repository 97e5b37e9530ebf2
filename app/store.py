import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional, Union

from app.models import Seller, Transaction
from app.relations import unlink

Entity = Union[Seller, Transaction]

# (table name, id) -> copy of the entity before the block touched it,
# or None when the block inserted it
UndoLog = dict[tuple[str, int], Optional[Entity]]


class DataStore:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.sellers: dict[int, Seller] = {}
        self.transactions: dict[int, Transaction] = {}
        # server-side timestamps for registration_date / transaction_date
        self.clock: Callable[[], datetime] = clock or datetime.now
        self._last_seller_id = 0
        self._last_transaction_id = 0
        self._lock = threading.RLock()
        self._undo: Optional[UndoLog] = None

    # ── unit of work ──────────────────────────────────────────────────────────

    @contextmanager
    def atomic(self) -> Iterator["DataStore"]:
        """Apply every change in the block, or none of them.

        The lock is held for the whole block, and every read takes it too, so
        other threads only ever see committed state. Entities fetched or
        written inside the block are recorded in an undo log the first time
        they are touched; a failing block puts exactly those entries back.

        Id counters are not rolled back, so an id handed out inside a failed
        block is never reused.
        """
        with self._lock:
            outer = self._undo
            self._undo = {}
            try:
                yield self
            except Exception:
                self._rollback(self._undo)
                raise
            else:
                if outer is not None:
                    for key, before in self._undo.items():
                        outer.setdefault(key, before)
            finally:
                self._undo = outer

    @contextmanager
    def reading(self) -> Iterator["DataStore"]:
        """Hold off writers while a multi-step read builds its result."""
        with self._lock:
            yield self

    def _table(self, name: str) -> dict:
        return self.sellers if name == "seller" else self.transactions

    def _touch(self, name: str, entity_id: int, inserted: bool = False) -> None:
        if self._undo is None or (name, entity_id) in self._undo:
            return
        current = self._table(name).get(entity_id)
        if inserted or current is None:
            self._undo[(name, entity_id)] = None
        else:
            self._undo[(name, entity_id)] = current.model_copy(deep=True)

    def _rollback(self, undo: UndoLog) -> None:
        for (name, entity_id), before in undo.items():
            table = self._table(name)
            if before is None:
                table.pop(entity_id, None)
            else:
                table[entity_id] = before

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller: Seller) -> Seller:
        with self._lock:
            self._last_seller_id += 1
            seller.id = self._last_seller_id
            seller.registration_date = self.clock()
            self._touch("seller", seller.id, inserted=True)
            self.sellers[seller.id] = seller
            return seller

    def add_transaction(self, txn: Transaction) -> Transaction:
        """Store ``txn`` under a fresh id; the caller links it to a seller."""
        with self._lock:
            self._last_transaction_id += 1
            txn.id = self._last_transaction_id
            txn.transaction_date = self.clock()
            self._touch("transaction", txn.id, inserted=True)
            self.transactions[txn.id] = txn
            return txn

    def delete_transaction(self, txn: Transaction) -> None:
        with self._lock:
            seller = self.get_seller(txn.seller_id)
            if seller is not None:
                unlink(seller, txn)
            self._touch("transaction", txn.id)
            del self.transactions[txn.id]

    def delete_seller(self, seller: Seller) -> int:
        """Delete ``seller`` and every transaction linked to it.

        Returns the number of transactions removed.
        """
        with self._lock:
            self._touch("seller", seller.id)
            removed = 0
            for txn_id in list(seller.transaction_ids):
                txn = self.get_transaction(txn_id)
                unlink(seller, txn)
                del self.transactions[txn_id]
                removed += 1
            del self.sellers[seller.id]
            return removed

    def clear(self) -> None:
        with self._lock:
            for seller_id in self.sellers:
                self._touch("seller", seller_id)
            for txn_id in self.transactions:
                self._touch("transaction", txn_id)
            self.sellers.clear()
            self.transactions.clear()

    # ── reads ─────────────────────────────────────────────────────────────────
    # Inside an atomic block a fetched entity may be about to change, so it is
    # recorded in the undo log first.

    def get_seller(self, seller_id: int) -> Optional[Seller]:
        with self._lock:
            self._touch("seller", seller_id)
            return self.sellers.get(seller_id)

    def get_transaction(self, txn_id: int) -> Optional[Transaction]:
        with self._lock:
            self._touch("transaction", txn_id)
            return self.transactions.get(txn_id)

    def list_sellers(self) -> list[Seller]:
        with self._lock:
            return list(self.sellers.values())

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self.transactions.values())

    def get_transactions_for_seller(self, seller_id: int) -> list[Transaction]:
        with self._lock:
            seller = self.sellers.get(seller_id)
            if seller is None:
                return []
            return [self.transactions[tid] for tid in seller.transaction_ids]

    def transactions_between(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions with ``start <= transaction_date < end``."""
        with self._lock:
            return [
                t for t in self.transactions.values()
                if start <= t.transaction_date < end
            ]


# module-level singleton used by the app
store = DataStore()
