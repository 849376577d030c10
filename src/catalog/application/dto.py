"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the transport adapters (CLI, message dispatcher)
and the application layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from catalog.domain.exceptions import StoreUnavailable
from catalog.domain.model.order_item import Direction
from catalog.domain.model.product import Product


@dataclass(frozen=True)
class ProductView:
    """Output: read-only snapshot of a product, taken at read time."""

    name: str
    category: str
    price: Decimal
    qty: int

    @staticmethod
    def of(product: Product) -> ProductView:
        return ProductView(
            name=product.name,
            category=product.category.value,
            price=product.price.amount,
            qty=product.qty,
        )

    def to_dict(self) -> dict:
        # Price goes out as a string so no consumer parses it into a float.
        return {
            "name": self.name,
            "category": self.category,
            "price": str(self.price),
            "qty": self.qty,
        }


@dataclass(frozen=True)
class AppliedDelta:
    product_id: str
    previous_qty: int
    new_qty: int


@dataclass(frozen=True)
class SkippedItem:
    product_id: str
    reason: str


@dataclass
class ReconciliationReport:
    """Output: what a batch of quantity deltas actually did.

    ``aborted_by`` is set when the store went away mid-batch; items listed
    in ``applied`` before that point stay applied, and ``remaining`` counts
    the items left unprocessed, starting with the one that hit the outage.
    """

    direction: Direction
    applied: list[AppliedDelta] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)
    aborted_by: StoreUnavailable | None = None
    remaining: int = 0
