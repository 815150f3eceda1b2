"""Application service: Show Cart use case (query).

Cart lines show *current* catalog prices. The price is only locked
in when the cart is checked out.
"""

from __future__ import annotations

from checkout.application.dto import CartDTO, CartLineDTO
from checkout.domain.model.cart import Cart
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.cart_store import CartStore
from checkout.domain.repository.product_repository import ProductRepository


class ShowCartHandler:

    def __init__(self, carts: CartStore, products: ProductRepository) -> None:
        self._carts = carts
        self._products = products

    def handle(self, customer_id: str) -> CartDTO:
        return cart_to_dto(self._carts.get(customer_id), self._products)


def cart_to_dto(cart: Cart, products: ProductRepository) -> CartDTO:
    lines: list[CartLineDTO] = []
    subtotal = Money.zero()
    for line in cart.lines:
        product = products.get_by_id(line.product_id)
        if product is None:
            # Product was removed from the catalog; checkout will reject it.
            lines.append(
                CartLineDTO(
                    product_id=line.product_id,
                    name="(unavailable)",
                    quantity=line.quantity.value,
                    unit_price="-",
                    line_total="-",
                    in_stock=0,
                )
            )
            continue
        line_total = product.price * line.quantity.value
        subtotal = subtotal + line_total
        lines.append(
            CartLineDTO(
                product_id=product.id,
                name=product.name,
                quantity=line.quantity.value,
                unit_price=str(product.price),
                line_total=str(line_total),
                in_stock=product.stock,
            )
        )
    return CartDTO(customer_id=cart.customer_id, lines=lines, subtotal=str(subtotal))
