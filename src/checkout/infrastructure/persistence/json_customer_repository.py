"""JSON-store-backed implementation of CustomerRepository."""

from __future__ import annotations

from checkout.domain.model.customer import Customer
from checkout.domain.repository.customer_repository import CustomerRepository
from checkout.infrastructure.persistence.json_store import JsonStore

COLLECTION = "customers"


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    def get_by_id(self, customer_id: str) -> Customer | None:
        raw = self._store.get(COLLECTION, customer_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Customer]:
        customers = [self._to_domain(raw) for raw in self._store.values(COLLECTION)]
        return sorted(customers, key=lambda c: (len(c.id), c.id))

    def save(self, customer: Customer) -> None:
        self._store.put(
            COLLECTION,
            customer.id,
            {
                "id": customer.id,
                "name": customer.name,
                "email": customer.email,
                "is_admin": customer.is_admin,
            },
        )

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            email=raw.get("email"),
            is_admin=raw.get("is_admin", False),
        )
