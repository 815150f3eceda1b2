"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    category: str
    price: str
    stock: int
    is_active: bool
    low_stock: bool
    out_of_stock: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository, low_stock_threshold: int = 10) -> None:
        self._product_repo = product_repo
        self._low_stock_threshold = low_stock_threshold

    def handle(self) -> list[InventoryLineDTO]:
        return [
            InventoryLineDTO(
                product_id=product.id,
                product_name=product.name,
                category=product.category,
                price=str(product.price),
                stock=product.stock,
                is_active=product.is_active,
                low_stock=0 < product.stock < self._low_stock_threshold,
                out_of_stock=product.stock == 0,
            )
            for product in self._product_repo.list_all()
        ]
