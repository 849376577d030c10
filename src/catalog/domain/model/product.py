"""Product aggregate.

Products are the only persisted state of the catalog. They are created and
edited by administrators, and their stock quantity is reconciled by the
order-processing service through messages.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from bson import ObjectId

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Money


class ProductCategory(Enum):
    ELECTRONICS = "ELECTRONICS"
    CLOTHING = "CLOTHING"
    BEAUTY = "BEAUTY"
    SPORTS = "SPORTS"
    TOYS = "TOYS"
    HEALTH = "HEALTH"
    PET_SUPPLIES = "PET_SUPPLIES"
    AUTOMOTIVE = "AUTOMOTIVE"

    @classmethod
    def parse(cls, raw: str) -> ProductCategory:
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(
                f"Unknown category {raw!r} (expected one of: {allowed})"
            ) from exc


@dataclass
class Product:
    """A product in the catalog.

    Use the ``Product.create()`` factory for new products. The ``__init__``
    does not re-check the stock invariant so that repositories can
    reconstitute records written by the reconciliation path, which is
    allowed to drive ``qty`` below zero.
    """

    id: ObjectId
    name: str
    category: ProductCategory
    price: Money
    qty: int

    @classmethod
    def create(
        cls,
        name: str,
        category: ProductCategory,
        price: Money,
        qty: int,
        product_id: ObjectId | None = None,
    ) -> Product:
        product = cls(
            id=product_id or ObjectId(),
            name=(name or "").strip(),
            category=category,
            price=price,
            qty=qty,
        )
        product.check_invariants()
        return product

    def check_invariants(self) -> None:
        """Raise ValidationError unless the product may be persisted."""
        if not self.name:
            raise ValidationError("Name is required")
        if self.price.amount < Decimal("0"):
            raise ValidationError("Price cannot be negative")
        if isinstance(self.qty, bool) or not isinstance(self.qty, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.qty).__name__}"
            )
        if self.qty < 0:
            raise ValidationError("Quantity cannot be negative")

    def total_price(self, qty: int) -> Decimal:
        """Exact price of ``qty`` units; no rounding is applied.

        ``qty`` is not checked here: a zero or negative line yields a zero or
        negative total.
        """
        return self.price.amount * qty


@dataclass(frozen=True)
class ProductPatch:
    """Partial update payload. A field left as ``None`` is absent."""

    name: str | None = None
    category: ProductCategory | None = None
    price: Decimal | None = None
    qty: int | None = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.name, self.category, self.price, self.qty))


def merge_patch(product: Product, patch: ProductPatch) -> tuple[Product, list[str]]:
    """Apply ``patch`` to ``product`` and return the merged copy.

    A name overwrites only when non-blank; price and quantity overwrite only
    when strictly positive. Anything else is ignored, never rejected. The
    second element lists the names of the fields that changed.
    """
    changes: dict[str, object] = {}
    if patch.name is not None and patch.name.strip():
        changes["name"] = patch.name.strip()
    if patch.category is not None:
        changes["category"] = patch.category
    if patch.price is not None and patch.price > Decimal("0"):
        changes["price"] = Money(patch.price)
    if patch.qty is not None and patch.qty > 0:
        changes["qty"] = patch.qty

    changed = [k for k, v in changes.items() if getattr(product, k) != v]
    return replace(product, **changes), changed

