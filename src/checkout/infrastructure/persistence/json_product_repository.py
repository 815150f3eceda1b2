"""JSON-store-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from checkout.domain.exceptions import ReservationInProgressError, ValidationError
from checkout.domain.model.product import DEFAULT_CATEGORY, Product
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.product_repository import ProductRepository
from checkout.infrastructure.persistence.json_store import JsonStore

COLLECTION = "products"


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._store.get(COLLECTION, product_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._store.values(COLLECTION):
            if raw["name"].lower() == name.strip().lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._store.values(COLLECTION)]
        return sorted(products, key=lambda p: (len(p.id), p.id))

    def save(self, product: Product) -> None:
        new_raw = self._to_raw(product)

        def apply(current: dict | None) -> dict:
            if current is None:
                return new_raw
            return {**new_raw, "stock": current["stock"]}

        self._store.modify(COLLECTION, product.id, apply)

    def set_stock(self, product_id: str, quantity: int) -> bool:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")

        def apply(current: dict | None) -> dict | None:
            if current is None:
                return None
            if self._store.has_open_reservations(COLLECTION, product_id):
                raise ReservationInProgressError(
                    f"Stock of product '{product_id}' is reserved by a checkout in progress"
                )
            return {**current, "stock": quantity}

        return self._store.modify(COLLECTION, product_id, apply) is not None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "category": product.category,
            "is_active": product.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw.get("stock", 0),
            category=raw.get("category", DEFAULT_CATEGORY),
            is_active=raw.get("is_active", True),
        )
