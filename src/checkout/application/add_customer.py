"""Application service: Add Customer use case."""

from __future__ import annotations

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.customer import Customer
from checkout.domain.repository.customer_repository import CustomerRepository


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, name: str, email: str | None = None, is_admin: bool = False) -> Customer:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if email is not None and email.strip() and "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")

        existing = self._customer_repo.list_all()
        next_id = str(max((int(c.id) for c in existing if c.id.isdigit()), default=0) + 1)

        customer = Customer(
            id=next_id,
            name=name.strip(),
            email=email.strip() if email and email.strip() else None,
            is_admin=is_admin,
        )
        self._customer_repo.save(customer)
        return customer
