"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFoundError(EntityNotFoundError):
    """No order with the given id (or the id is malformed)."""

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id!r} not found")
        self.order_id = order_id


class EmptyCartError(DomainException):
    """Checkout was attempted with an empty cart."""


class InvalidLineError(DomainException):
    """A cart line references a product that cannot be resolved."""


class InsufficientStockError(DomainException):
    """Not enough stock to reserve the requested quantity."""

    def __init__(self, product_name: str) -> None:
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_name = product_name


class ForbiddenError(DomainException):
    """The requester does not own the resource."""


class AlreadyCancelledError(DomainException):
    """Cancelled is a terminal state."""


class AlreadyPaidError(DomainException):
    """The order was already settled with a different payment."""


class InvalidTransitionError(DomainException):
    """The requested status change is not allowed from the current status."""


class CartChangedError(DomainException):
    """The cart no longer holds the lines a checkout was priced from."""


class ReservationInProgressError(DomainException):
    """Stock cannot be overwritten while a checkout holds a reservation on it."""
