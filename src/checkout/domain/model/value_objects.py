"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from checkout.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def rounded(self) -> Money:
        """Round half-up to whole cents."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


_ADDRESS_LABELS = {
    "street": "Street address",
    "city": "City",
    "state": "State",
    "zip_code": "Zip code",
    "country": "Country",
}


@dataclass(frozen=True)
class ShippingAddress:
    """Where an order ships to. Every field is required and non-blank."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        missing = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value.strip():
                missing.append(f"{_ADDRESS_LABELS[f.name]} is required")
            else:
                # frozen: bypass __setattr__ to store the trimmed value
                object.__setattr__(self, f.name, value.strip())
        if missing:
            raise ValidationError(", ".join(missing))

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class PaymentMethod(Enum):
    CREDIT_CARD = "CreditCard"
    PAYPAL = "PayPal"
    BANK_TRANSFER = "BankTransfer"

    @property
    def settles_through_gateway(self) -> bool:
        """Gateway payments are confirmed asynchronously by the payment provider."""
        return self is not PaymentMethod.BANK_TRANSFER

    @staticmethod
    def parse(raw: str) -> PaymentMethod:
        """Accept the canonical value or a spaced/case-insensitive spelling."""
        normalized = "".join((raw or "").split()).lower()
        for method in PaymentMethod:
            if method.value.lower() == normalized:
                return method
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Invalid payment method {raw!r} (expected one of: {allowed})")


@dataclass(frozen=True)
class PaymentResult:
    """Settlement data returned by the payment gateway."""

    id: str
    status: str
    payment_method: str
    receipt_url: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Payment result id is required")
        if not self.status or not self.status.strip():
            raise ValidationError("Payment result status is required")

    def as_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "status": self.status,
            "payment_method": self.payment_method,
            "receipt_url": self.receipt_url,
        }


@dataclass(frozen=True)
class PriceBreakdown:
    """Totals of an order, each already rounded to whole cents."""

    items_price: Money
    shipping_price: Money
    tax_price: Money
    total_price: Money
