"""Application service: Update Cart Item use case."""

from __future__ import annotations

from checkout.application.dto import CartDTO
from checkout.application.show_cart import cart_to_dto
from checkout.domain.exceptions import InsufficientStockError, InvalidLineError
from checkout.domain.model.value_objects import Quantity
from checkout.domain.repository.cart_store import CartStore
from checkout.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(self, carts: CartStore, products: ProductRepository) -> None:
        self._carts = carts
        self._products = products

    def handle(self, customer_id: str, product_id: str, quantity: int) -> CartDTO:
        """Overwrite the quantity of a product already in the cart."""
        qty = Quantity(quantity)

        product = self._products.get_by_id(product_id)
        if product is None:
            raise InvalidLineError(f"Product '{product_id}' does not exist")
        if not product.has_stock_for(qty.value):
            raise InsufficientStockError(product.name)

        cart = self._carts.set_quantity(customer_id, product_id, qty.value)
        return cart_to_dto(cart, self._products)
