"""Unit tests for the Cart aggregate."""

import pytest

from checkout.domain.exceptions import EntityNotFoundError
from checkout.domain.model.cart import Cart
from checkout.domain.model.value_objects import Quantity


class TestCart:

    def test_new_cart_is_empty(self):
        assert Cart(customer_id="1").is_empty

    def test_add_same_product_increments_line(self):
        cart = Cart(customer_id="1")
        cart.add("p1", Quantity(2))
        cart.add("p1", Quantity(3))
        assert len(cart.lines) == 1
        assert cart.quantity_of("p1") == 5

    def test_lines_keep_insertion_order(self):
        cart = Cart(customer_id="1")
        cart.add("p2", Quantity(1))
        cart.add("p1", Quantity(1))
        assert [line.product_id for line in cart.lines] == ["p2", "p1"]

    def test_set_quantity_requires_existing_line(self):
        cart = Cart(customer_id="1")
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            cart.set_quantity("p1", Quantity(1))

    def test_remove_and_clear(self):
        cart = Cart(customer_id="1")
        cart.add("p1", Quantity(1))
        cart.add("p2", Quantity(1))
        cart.remove("p1")
        assert cart.quantity_of("p1") == 0
        cart.clear()
        assert cart.is_empty
