"""Application service: Set Stock use case (catalog restock)."""

from __future__ import annotations

import structlog

from checkout.domain.exceptions import EntityNotFoundError, ValidationError
from checkout.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str, quantity: int) -> None:
        """Overwrite the stock level of a product."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError(f"Stock must be a non-negative integer, got {quantity!r}")

        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        if not self._product_repo.set_stock(product.id, quantity):
            raise EntityNotFoundError(f"Product not found: '{product_name}'")
        logger.info("stock_set", product_id=product.id, stock=quantity)
