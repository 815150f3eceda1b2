"""Abstract unit of work over the transactional store.

Usage::

    with transactions.begin() as txn:
        ledger.reserve(product_id, qty, txn=txn)
        orders.add(order, txn=txn)
        txn.commit()

Leaving the ``with`` block without committing (including via an
exception) aborts the transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transaction(ABC):

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True until commit() or abort() has run."""

    @abstractmethod
    def commit(self) -> None:
        """Make every staged write durable, atomically."""

    @abstractmethod
    def abort(self) -> None:
        """Discard staged writes and undo reservations made so far."""

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.is_active:
            self.abort()
        return False


class TransactionManager(ABC):

    @abstractmethod
    def begin(self) -> Transaction:
        """Open a new transaction."""
