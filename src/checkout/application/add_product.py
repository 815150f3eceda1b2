"""Application service: Add Product use case."""

from __future__ import annotations

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.product import DEFAULT_CATEGORY, Product
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = DEFAULT_CATEGORY,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name)
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        next_id = str(max((int(p.id) for p in all_products if p.id.isdigit()), default=0) + 1)

        product = Product(
            id=next_id,
            name=name.strip(),
            price=money,
            stock=stock,
            category=(category or DEFAULT_CATEGORY).strip().lower(),
        )
        self._product_repo.save(product)
        return product
