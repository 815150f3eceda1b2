"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int_and_decimal(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")
        assert Money.of("100.00") * Decimal("0.10") == Money.of("10.0000")

    def test_multiplication_by_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * True

    def test_rounding_is_half_up(self):
        assert Money.of("0.125").rounded() == Money.of("0.13")
        assert Money.of("0.124").rounded() == Money.of("0.12")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_addition(self):
        assert Quantity(2) + Quantity(3) == Quantity(5)


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_values_are_trimmed(self):
        address = ShippingAddress("  1 Main St ", "Springfield ", "IL", "62701", " USA")
        assert address.street == "1 Main St"
        assert address.city == "Springfield"
        assert address.country == "USA"

    def test_blank_city_rejected(self):
        with pytest.raises(ValidationError, match="City is required"):
            ShippingAddress("1 Main St", "   ", "IL", "62701", "USA")

    def test_every_missing_field_is_reported(self):
        with pytest.raises(ValidationError) as excinfo:
            ShippingAddress("", "", "IL", "", "USA")
        message = str(excinfo.value)
        assert "Street address is required" in message
        assert "City is required" in message
        assert "Zip code is required" in message
        assert "State" not in message


# ── PaymentMethod / PaymentResult ────────────────────────────────────────────


class TestPaymentMethod:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("CreditCard", PaymentMethod.CREDIT_CARD),
            ("paypal", PaymentMethod.PAYPAL),
            ("Bank Transfer", PaymentMethod.BANK_TRANSFER),
        ],
    )
    def test_parse(self, raw, expected):
        assert PaymentMethod.parse(raw) is expected

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            PaymentMethod.parse("Bitcoin")

    def test_only_bank_transfer_settles_outside_the_gateway(self):
        assert PaymentMethod.CREDIT_CARD.settles_through_gateway
        assert PaymentMethod.PAYPAL.settles_through_gateway
        assert not PaymentMethod.BANK_TRANSFER.settles_through_gateway


class TestPaymentResult:

    def test_id_required(self):
        with pytest.raises(ValidationError, match="id is required"):
            PaymentResult(id=" ", status="COMPLETED", payment_method="PayPal")

    def test_equal_by_value(self):
        a = PaymentResult(id="PAY-1", status="COMPLETED", payment_method="PayPal")
        b = PaymentResult(id="PAY-1", status="COMPLETED", payment_method="PayPal")
        assert a == b
