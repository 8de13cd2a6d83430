"""
Errors raised by the storefront layer.

Backend query failures are not raised: the catalog and order repositories log
them and return empty results. Everything below is terminal for the user
action that triggered it; nothing is retried.
"""
from typing import Dict


class StorefrontError(Exception):
    """Base class for storefront errors."""


class MalformedRowError(StorefrontError):
    """A backend row is missing required fields or has the wrong shape."""

    def __init__(self, table: str, row_id, detail: str):
        self.table = table
        self.row_id = row_id
        self.detail = detail
        super().__init__(f"Malformed {table} row {row_id!r}: {detail}")


class ShippingValidationError(StorefrontError):
    """The shipping form has one or more invalid fields."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("Invalid shipping address: " + ", ".join(sorted(self.errors)))


class PaymentDeclinedError(StorefrontError):
    """The simulated payment was rejected; no order was created."""


class EmptyCartError(StorefrontError):
    """Checkout was attempted with an empty cart."""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class NotificationError(StorefrontError):
    """An order notification row could not be recorded."""


class OrderCreationError(StorefrontError):
    """The order header or its items could not be written."""
