"""InventoryLedger over the JSON store's conditional-add primitive."""

from __future__ import annotations

import structlog

from checkout.domain.exceptions import ValidationError
from checkout.domain.repository.inventory_ledger import InventoryLedger, ReservationResult
from checkout.infrastructure.persistence.json_store import JsonStore, JsonTransaction

logger = structlog.get_logger(__name__)

COLLECTION = "products"


class JsonInventoryLedger(InventoryLedger):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    def reserve(
        self, product_id: str, quantity: int, txn: JsonTransaction | None = None
    ) -> ReservationResult:
        self._check_quantity(quantity)
        applied = self._store.conditional_add(
            COLLECTION, product_id, "stock", -quantity, txn=txn
        )
        if applied is None:
            logger.warning("reservation_unknown_product", product_id=product_id)
            return ReservationResult.NOT_FOUND
        if not applied:
            logger.info(
                "reservation_refused", product_id=product_id, quantity=quantity
            )
            return ReservationResult.INSUFFICIENT_STOCK
        return ReservationResult.OK

    def release(
        self, product_id: str, quantity: int, txn: JsonTransaction | None = None
    ) -> ReservationResult:
        self._check_quantity(quantity)
        applied = self._store.conditional_add(
            COLLECTION, product_id, "stock", quantity, txn=txn
        )
        if applied is None:
            logger.warning("release_unknown_product", product_id=product_id)
            return ReservationResult.NOT_FOUND
        return ReservationResult.OK

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Stock quantity must be a positive integer, got {quantity!r}")
