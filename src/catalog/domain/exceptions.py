"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the transport layers (CLI, message dispatcher) can catch them uniformly
and translate them into user-facing outcomes.

The exceptions carry the offending identifiers but never a retry hint:
whether a failure is retried, dropped or rejected is decided by the caller.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):

    def __init__(self, product_id: object) -> None:
        self.product_id = str(product_id)
        super().__init__(f"Product not found with ID: {self.product_id}")


class InsufficientQuantity(ValidationError):
    """More units were requested than the product has in stock."""

    def __init__(self, product_id: object, available: int, requested: int) -> None:
        self.product_id = str(product_id)
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough quantity of product with ID {self.product_id}: "
            f"{available}; expected: {requested}"
        )


class ProductNameConflict(ValidationError):

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Product with name '{name}' already exists")


class MalformedReference(ValidationError):
    """A product reference is not a valid product identifier."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Invalid product ID: {raw!r}")


class AccessDenied(DomainException):

    def __init__(self, role: str | None) -> None:
        self.role = role
        super().__init__("Access denied")


class StoreUnavailable(DomainException):
    """The document store could not be reached or failed mid-operation."""


class ConcurrentModification(DomainException):
    """A conditional write kept losing to concurrent writers."""

    def __init__(self, product_id: object, attempts: int) -> None:
        self.product_id = str(product_id)
        self.attempts = attempts
        super().__init__(
            f"Quantity of product with ID {self.product_id} changed concurrently "
            f"{attempts} times in a row"
        )
