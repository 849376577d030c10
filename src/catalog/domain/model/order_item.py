"""Order lines received from the order-processing service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Which way a reconciliation moves stock."""

    FETCH = "FETCH"  # order placed: take units out of stock
    RESTORE = "RESTORE"  # order cancelled or returned: put them back

    def apply(self, current: int, qty: int) -> int:
        # No clamp at zero: a debit larger than the stock is recorded as-is.
        return current + qty if self is Direction.RESTORE else current - qty


@dataclass(frozen=True)
class OrderItem:
    """One line of an order as it travels over the broker.

    ``product_id`` is kept in its wire (string) form; it is parsed only when
    the line is resolved against the catalog. ``qty`` is not validated here.
    """

    product_id: str
    qty: int
