"""Transactional JSON document store shared by every JSON repository.

All collections live in one JSON file so that a commit touching orders,
carts and stock lands in a single atomic file replace. The live state
is held in memory behind one re-entrant lock. The lock is held only for
the duration of one primitive (read, conditional add, modify, commit),
never across a whole use case.

Transactions combine two mechanisms:

- conditional adds (stock reservations) apply to the live state
  immediately, so concurrent checkouts see each other's reservations,
  and are remembered so that ``abort()`` can undo them;
- puts and modifies are staged and applied together on ``commit()``.

The file only ever holds committed state: reservations of still-open
transactions are subtracted back out when the file is written.
"""

from __future__ import annotations

import copy
import itertools
import json
import os
import threading
from collections.abc import Callable
from pathlib import Path

import structlog

from checkout.domain.repository.transaction import Transaction, TransactionManager

logger = structlog.get_logger(__name__)

COLLECTIONS = ("products", "customers", "carts", "orders", "metrics")

Record = dict
Mutator = Callable[[Record | None], Record | None]


class JsonTransaction(Transaction):

    def __init__(self, store: JsonStore, txn_id: int) -> None:
        self._store = store
        self.id = txn_id
        self._active = True
        self._staged: list[tuple[str, str, Mutator]] = []
        self._deltas: list[tuple[str, str, str, int]] = []

    @property
    def is_active(self) -> bool:
        return self._active

    def commit(self) -> None:
        self._ensure_active()
        self._store._commit(self)

    def abort(self) -> None:
        if self._active:
            self._store._abort(self)

    def _ensure_active(self) -> None:
        if not self._active:
            raise RuntimeError(f"Transaction {self.id} is no longer active")


class JsonStore(TransactionManager):

    def __init__(self, file_path: Path | None = None) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._data: dict[str, dict[str, Record]] = {name: {} for name in COLLECTIONS}
        self._open: dict[int, JsonTransaction] = {}
        self._txn_ids = itertools.count(1)
        if file_path is not None:
            self._ensure_file()
            self._load()

    # --- TransactionManager interface -----------------------------------------

    def begin(self) -> JsonTransaction:
        with self._lock:
            txn = JsonTransaction(self, next(self._txn_ids))
            self._open[txn.id] = txn
        logger.debug("transaction_begun", txn_id=txn.id)
        return txn

    # --- Reads ----------------------------------------------------------------

    def get(self, collection: str, key: str) -> Record | None:
        with self._lock:
            record = self._collection(collection).get(key)
            return copy.deepcopy(record)

    def values(self, collection: str) -> list[Record]:
        with self._lock:
            return copy.deepcopy(list(self._collection(collection).values()))

    # --- Writes ---------------------------------------------------------------

    def put(
        self,
        collection: str,
        key: str,
        record: Record,
        txn: JsonTransaction | None = None,
    ) -> None:
        snapshot = copy.deepcopy(record)
        self.modify(collection, key, lambda _current: snapshot, txn=txn)

    def modify(
        self,
        collection: str,
        key: str,
        mutate: Mutator,
        txn: JsonTransaction | None = None,
    ) -> Record | None:
        """Atomic read-modify-write of one record.

        ``mutate`` receives a private copy of the current record (None if
        absent) and returns the record to store, or None to leave it as it
        is. Exceptions raised by ``mutate`` propagate and nothing is
        written. With ``txn`` the call is staged and returns None.
        """
        self._collection(collection)
        if txn is not None:
            self._check_owner(txn)
            txn._ensure_active()
            txn._staged.append((collection, key, mutate))
            return None

        with self._lock:
            result = self._apply(collection, key, mutate)
            if result is not None:
                self._flush()
            return copy.deepcopy(result if result is not None else self._data[collection].get(key))

    def conditional_add(
        self,
        collection: str,
        key: str,
        field: str,
        delta: int,
        txn: JsonTransaction | None = None,
    ) -> bool | None:
        """Add ``delta`` to an integer field unless the result would be negative.

        Returns None if the record does not exist, False if the change was
        refused, True if it was applied. The check and the write happen
        under one lock acquisition.
        """
        if txn is not None:
            self._check_owner(txn)
            txn._ensure_active()

        with self._lock:
            records = self._collection(collection)
            record = records.get(key)
            if record is None:
                return None
            new_value = record[field] + delta
            if new_value < 0:
                return False
            records[key] = {**record, field: new_value}
            if txn is None:
                self._flush()
            else:
                txn._deltas.append((collection, key, field, delta))
            return True

    def has_open_reservations(self, collection: str, key: str) -> bool:
        """True while an open transaction holds a conditional add on the record."""
        with self._lock:
            return any(
                (txn_collection, txn_key) == (collection, key)
                for txn in self._open.values()
                for txn_collection, txn_key, _, _ in txn._deltas
            )

    # --- Transaction internals ------------------------------------------------

    def _commit(self, txn: JsonTransaction) -> None:
        with self._lock:
            touched = {collection for collection, _, _ in txn._staged}
            backup = {name: dict(self._data[name]) for name in touched}
            try:
                for collection, key, mutate in txn._staged:
                    self._apply(collection, key, mutate)
                del self._open[txn.id]
                self._flush()
            except Exception:
                self._data.update(backup)
                self._open[txn.id] = txn
                logger.error("transaction_commit_failed", txn_id=txn.id)
                raise
            txn._active = False
        logger.debug(
            "transaction_committed",
            txn_id=txn.id,
            writes=len(txn._staged),
            reservations=len(txn._deltas),
        )

    def _abort(self, txn: JsonTransaction) -> None:
        with self._lock:
            for collection, key, field, delta in reversed(txn._deltas):
                record = self._data[collection].get(key)
                if record is not None:
                    self._data[collection][key] = {**record, field: record[field] - delta}
            self._open.pop(txn.id, None)
            txn._active = False
        logger.info(
            "transaction_aborted",
            txn_id=txn.id,
            undone_reservations=len(txn._deltas),
            discarded_writes=len(txn._staged),
        )

    def _apply(self, collection: str, key: str, mutate: Mutator) -> Record | None:
        records = self._data[collection]
        current = copy.deepcopy(records.get(key))
        result = mutate(current)
        if result is not None:
            records[key] = result
        return result

    def _check_owner(self, txn: JsonTransaction) -> None:
        if txn._store is not self:
            raise RuntimeError("Transaction belongs to a different store")

    def _collection(self, name: str) -> dict[str, Record]:
        try:
            return self._data[name]
        except KeyError:
            raise KeyError(f"Unknown collection '{name}'") from None

    # --- File helpers ---------------------------------------------------------

    def _committed_view(self) -> dict[str, dict[str, Record]]:
        view = copy.deepcopy(self._data)
        for txn in self._open.values():
            for collection, key, field, delta in txn._deltas:
                record = view[collection].get(key)
                if record is not None:
                    record[field] -= delta
        return view

    def _flush(self) -> None:
        if self._file_path is None:
            return
        payload = json.dumps(self._committed_view(), indent=2) + "\n"
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _load(self) -> None:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        for name in COLLECTIONS:
            self._data[name] = dict(raw.get(name, {}))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({name: {} for name in COLLECTIONS}), encoding="utf-8"
            )
