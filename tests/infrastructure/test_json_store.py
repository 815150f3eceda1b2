"""Tests for the transactional JSON document store."""

import json

import pytest

from checkout.infrastructure.persistence.json_store import JsonStore


def _on_disk(path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "checkout.json"


@pytest.fixture
def store(path):
    s = JsonStore(path)
    s.put("products", "1", {"id": "1", "stock": 5})
    return s


class TestBasics:

    def test_creates_file_with_every_collection(self, path):
        JsonStore(path)
        assert set(_on_disk(path)) == {"products", "customers", "carts", "orders", "metrics"}

    def test_reads_return_private_copies(self, store):
        record = store.get("products", "1")
        record["stock"] = 999
        assert store.get("products", "1")["stock"] == 5

    def test_unknown_collection(self, store):
        with pytest.raises(KeyError, match="Unknown collection"):
            store.get("invoices", "1")

    def test_state_survives_reload(self, store, path):
        store.put("customers", "7", {"id": "7", "name": "Alice"})
        assert JsonStore(path).get("customers", "7") == {"id": "7", "name": "Alice"}

    def test_no_temp_file_left_behind(self, store, path):
        store.put("customers", "7", {"id": "7"})
        assert list(path.parent.iterdir()) == [path]


class TestModify:

    def test_mutator_returning_none_leaves_record(self, store):
        assert store.modify("products", "1", lambda current: None) == {"id": "1", "stock": 5}

    def test_missing_record(self, store):
        assert store.modify("products", "2", lambda current: None) is None

    def test_mutator_error_writes_nothing(self, store, path):
        def explode(current):
            current["stock"] = 0
            raise ValueError("nope")

        with pytest.raises(ValueError):
            store.modify("products", "1", explode)
        assert store.get("products", "1")["stock"] == 5
        assert _on_disk(path)["products"]["1"]["stock"] == 5


class TestConditionalAdd:

    def test_decrement_within_stock(self, store):
        assert store.conditional_add("products", "1", "stock", -5) is True
        assert store.get("products", "1")["stock"] == 0

    def test_decrement_below_zero_refused(self, store):
        assert store.conditional_add("products", "1", "stock", -6) is False
        assert store.get("products", "1")["stock"] == 5

    def test_missing_record(self, store):
        assert store.conditional_add("products", "9", "stock", -1) is None


class TestTransactions:

    def test_commit_applies_staged_writes_together(self, store, path):
        with store.begin() as txn:
            store.conditional_add("products", "1", "stock", -2, txn=txn)
            store.put("orders", "o1", {"id": "o1"}, txn=txn)
            assert store.get("orders", "o1") is None  # staged only
            txn.commit()

        assert store.get("orders", "o1") == {"id": "o1"}
        assert _on_disk(path)["products"]["1"]["stock"] == 3
        assert not txn.is_active

    def test_reservations_are_visible_before_commit(self, store):
        txn = store.begin()
        store.conditional_add("products", "1", "stock", -4, txn=txn)
        assert store.conditional_add("products", "1", "stock", -2) is False
        txn.abort()
        assert store.conditional_add("products", "1", "stock", -2) is True

    def test_abort_undoes_reservations_and_drops_writes(self, store):
        txn = store.begin()
        store.conditional_add("products", "1", "stock", -3, txn=txn)
        store.put("orders", "o1", {"id": "o1"}, txn=txn)
        txn.abort()

        assert store.get("products", "1")["stock"] == 5
        assert store.get("orders", "o1") is None

    def test_exception_inside_with_block_aborts(self, store):
        with pytest.raises(RuntimeError):
            with store.begin() as txn:
                store.conditional_add("products", "1", "stock", -3, txn=txn)
                raise RuntimeError("crash")
        assert store.get("products", "1")["stock"] == 5

    def test_file_never_shows_uncommitted_reservations(self, store, path):
        txn = store.begin()
        store.conditional_add("products", "1", "stock", -3, txn=txn)
        store.put("customers", "1", {"id": "1"})  # unrelated write flushes the file

        assert _on_disk(path)["products"]["1"]["stock"] == 5
        txn.abort()

    def test_failed_commit_restores_state(self, store):
        def explode(current):
            raise ValueError("bad record")

        txn = store.begin()
        store.put("orders", "o1", {"id": "o1"}, txn=txn)
        store.modify("carts", "1", explode, txn=txn)
        with pytest.raises(ValueError):
            txn.commit()
        assert store.get("orders", "o1") is None
        assert txn.is_active
        txn.abort()

    def test_open_reservations_are_reported_until_the_transaction_ends(self, store):
        assert store.has_open_reservations("products", "1") is False
        txn = store.begin()
        store.conditional_add("products", "1", "stock", -1, txn=txn)
        assert store.has_open_reservations("products", "1") is True
        assert store.has_open_reservations("products", "2") is False
        txn.commit()
        assert store.has_open_reservations("products", "1") is False

    def test_finished_transaction_cannot_be_reused(self, store):
        txn = store.begin()
        txn.commit()
        with pytest.raises(RuntimeError, match="no longer active"):
            store.put("orders", "o1", {"id": "o1"}, txn=txn)

    def test_transaction_from_another_store_rejected(self, store):
        other = JsonStore()
        with pytest.raises(RuntimeError, match="different store"):
            store.put("orders", "o1", {}, txn=other.begin())
