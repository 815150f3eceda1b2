"""Abstract repository for the customer directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer, or None if unknown."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""
