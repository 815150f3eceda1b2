"""Application services: Remove Cart Item and Clear Cart use cases."""

from __future__ import annotations

from checkout.application.dto import CartDTO
from checkout.application.show_cart import cart_to_dto
from checkout.domain.repository.cart_store import CartStore
from checkout.domain.repository.product_repository import ProductRepository


class RemoveCartItemHandler:

    def __init__(self, carts: CartStore, products: ProductRepository) -> None:
        self._carts = carts
        self._products = products

    def handle(self, customer_id: str, product_id: str) -> CartDTO:
        cart = self._carts.remove_item(customer_id, product_id)
        return cart_to_dto(cart, self._products)


class ClearCartHandler:

    def __init__(self, carts: CartStore) -> None:
        self._carts = carts

    def handle(self, customer_id: str) -> None:
        self._carts.clear(customer_id)
