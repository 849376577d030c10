"""Domain service: resolving product references.

Messages and management calls refer to products by the string form of
their ObjectId. Resolution has two distinct failure kinds, a reference that
cannot be an identifier at all and an identifier with no product behind it,
and callers treat them differently.
"""

from __future__ import annotations

import structlog
from bson import ObjectId

from catalog.domain.exceptions import MalformedReference, ProductNotFound
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


def parse_product_id(raw: object) -> ObjectId:
    if isinstance(raw, ObjectId):
        return raw
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        raise MalformedReference(raw)
    return ObjectId(raw)


def product_not_found(product_id: object) -> ProductNotFound:
    log.warning("product_not_found", product_id=str(product_id))
    return ProductNotFound(product_id)


def require_product(repo: ProductRepository, product_id: ObjectId) -> Product:
    product = repo.get_by_id(product_id)
    if product is None:
        raise product_not_found(product_id)
    return product
