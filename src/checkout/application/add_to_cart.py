"""Application service: Add To Cart use case.

Stock is checked against the total the customer would hold in the cart,
but nothing is reserved here. Reservation only happens at checkout.
"""

from __future__ import annotations

import structlog

from checkout.application.dto import CartDTO
from checkout.application.show_cart import cart_to_dto
from checkout.domain.exceptions import InsufficientStockError, InvalidLineError, ValidationError
from checkout.domain.model.value_objects import Quantity
from checkout.domain.repository.cart_store import CartStore
from checkout.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, carts: CartStore, products: ProductRepository) -> None:
        self._carts = carts
        self._products = products

    def handle(self, customer_id: str, product_id: str, quantity: int = 1) -> CartDTO:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")
        qty = Quantity(quantity)

        product = self._products.get_by_id(product_id)
        if product is None:
            raise InvalidLineError(f"Product '{product_id}' does not exist")
        if not product.is_active:
            raise InvalidLineError(f"Product '{product.name}' is not available")

        in_cart = self._carts.get(customer_id).quantity_of(product_id)
        if not product.has_stock_for(in_cart + qty.value):
            raise InsufficientStockError(product.name)

        cart = self._carts.add_item(customer_id, product_id, qty.value)
        logger.debug(
            "cart_item_added",
            customer_id=customer_id,
            product_id=product_id,
            quantity=cart.quantity_of(product_id),
        )
        return cart_to_dto(cart, self._products)
