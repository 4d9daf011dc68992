"""Product domain errors.

Raised by the service layer; the API layer renders them as ``{"error": message}``
with the attached status code.
"""

from __future__ import annotations


class ProductError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ProductValidationError(ProductError):
    """The caller supplied missing or invalid product fields."""

    status_code = 400
    default_message = "Name and price are required"


class ProductNotFound(ProductError):
    """No product exists for the requested id."""

    status_code = 404
    default_message = "Product not found"


class StorageFault(ProductError):
    """Unexpected persistence failure; the message never carries driver detail."""

    status_code = 500
