"""Wire format of the three product-service channels.

Bodies are JSON. An order line is ``{"productId": "<hex ObjectId>", "qty": 3}``
(``product_id`` is accepted too). ``total-price`` carries one line and
answers with the total as a JSON string, e.g. ``"30.00"``, so the exact
decimal survives the trip; ``fetch-qty`` and ``restore-qty`` carry a list of
lines and answer nothing.
"""

from __future__ import annotations

import json
from decimal import Decimal
from enum import Enum

from catalog.domain.model.order_item import OrderItem


class Channel(Enum):
    TOTAL_PRICE = "total-price"
    FETCH_QTY = "fetch-qty"
    RESTORE_QTY = "restore-qty"


class MalformedMessage(ValueError):
    """The body cannot be decoded into what the channel carries."""


def decode_item(raw: object) -> OrderItem:
    if not isinstance(raw, dict):
        raise MalformedMessage(f"Order item must be an object, got {type(raw).__name__}")

    product_id = raw.get("productId", raw.get("product_id"))
    if not isinstance(product_id, str):
        raise MalformedMessage(f"Order item has no string productId: {raw!r}")

    qty = raw.get("qty")
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise MalformedMessage(f"Order item qty must be an integer: {raw!r}")

    return OrderItem(product_id=product_id, qty=qty)


def decode_body(channel: Channel, body: bytes | str) -> OrderItem | list[OrderItem]:
    try:
        raw = json.loads(body)
    except ValueError as exc:
        raise MalformedMessage(f"Body is not valid JSON: {exc}") from exc

    if channel is Channel.TOTAL_PRICE:
        return decode_item(raw)

    if not isinstance(raw, list):
        raise MalformedMessage(
            f"{channel.value} expects a list of order items, got {type(raw).__name__}"
        )
    return [decode_item(item) for item in raw]


def encode_reply(total: Decimal) -> bytes:
    return json.dumps(str(total)).encode("utf-8")
