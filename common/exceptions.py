"""Domain error taxonomy shared by the cart and orders apps.

Services raise these; the API exception handler maps them to HTTP responses.
"""


class ShopError(Exception):
    """Base class for domain failures raised by services."""

    default_message = "Unexpected shop error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ShopError):
    """Raised when a cart, product, cart line or order does not exist."""

    default_message = "Not found."


class InvalidInput(ShopError):
    """Raised when a request cannot be honoured, e.g. quantity above live stock."""

    default_message = "Invalid input."


class InvalidState(ShopError):
    """Raised when an aggregate is in the wrong state, e.g. checkout of an empty cart."""

    default_message = "Invalid state."


class ConsistencyViolation(ShopError):
    """Raised when recalculated totals are impossible. Indicates corrupted data."""

    default_message = "Cart totals are inconsistent."
