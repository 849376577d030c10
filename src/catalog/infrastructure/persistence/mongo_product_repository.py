"""MongoDB-backed implementation of ProductRepository.

Products live in one collection, keyed by their ObjectId. Prices are stored
as ``Decimal128`` so they round-trip without ever becoming floats.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException

import structlog
from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from catalog.domain.exceptions import (
    ProductNameConflict,
    StoreUnavailable,
    ValidationError,
)
from catalog.domain.model.product import Product, ProductCategory
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


def _to_decimal128(amount: Decimal) -> Decimal128:
    """Decimal128 holds 34 significant digits; refuse prices it would round."""
    try:
        return Decimal128(amount)
    except DecimalException as exc:
        raise ValidationError(f"Price {amount} cannot be stored exactly") from exc


class MongoProductRepository(ProductRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        """Create the unique index that backs name uniqueness."""
        try:
            self._collection.create_index([("name", ASCENDING)], unique=True)
        except PyMongoError as exc:
            raise self._unavailable("create_index", exc) from exc

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: ObjectId) -> Product | None:
        try:
            doc = self._collection.find_one({"_id": product_id})
        except PyMongoError as exc:
            raise self._unavailable("find_one", exc) from exc
        return self._to_domain(doc) if doc else None

    def get_by_name(self, name: str) -> Product | None:
        try:
            doc = self._collection.find_one({"name": name})
        except PyMongoError as exc:
            raise self._unavailable("find_one", exc) from exc
        return self._to_domain(doc) if doc else None

    def exists_by_id(self, product_id: ObjectId) -> bool:
        try:
            return self._collection.count_documents({"_id": product_id}, limit=1) > 0
        except PyMongoError as exc:
            raise self._unavailable("count_documents", exc) from exc

    def exists_by_name(self, name: str) -> bool:
        try:
            return self._collection.count_documents({"name": name}, limit=1) > 0
        except PyMongoError as exc:
            raise self._unavailable("count_documents", exc) from exc

    def list_all(self) -> list[Product]:
        try:
            return [self._to_domain(doc) for doc in self._collection.find({})]
        except PyMongoError as exc:
            raise self._unavailable("find", exc) from exc

    def save(self, product: Product) -> None:
        try:
            self._collection.replace_one(
                {"_id": product.id}, self._to_document(product), upsert=True
            )
        except DuplicateKeyError as exc:
            raise ProductNameConflict(product.name) from exc
        except PyMongoError as exc:
            raise self._unavailable("replace_one", exc) from exc

    def delete_by_id(self, product_id: ObjectId) -> None:
        try:
            self._collection.delete_one({"_id": product_id})
        except PyMongoError as exc:
            raise self._unavailable("delete_one", exc) from exc

    def update_quantity(
        self,
        product_id: ObjectId,
        new_qty: int,
        expected_qty: int | None = None,
    ) -> bool:
        query: dict = {"_id": product_id}
        if expected_qty is not None:
            query["qty"] = expected_qty
        try:
            matched = self._collection.find_one_and_update(
                query,
                {"$set": {"qty": new_qty}},
                projection={"_id": True},
            )
        except PyMongoError as exc:
            raise self._unavailable("find_one_and_update", exc) from exc
        return matched is not None

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_document(product: Product) -> dict:
        return {
            "_id": product.id,
            "name": product.name,
            "category": product.category.value,
            "price": _to_decimal128(product.price.amount),
            "qty": product.qty,
        }

    @staticmethod
    def _to_domain(doc: dict) -> Product:
        price = doc["price"]
        if isinstance(price, Decimal128):
            price = price.to_decimal()
        return Product(
            id=doc["_id"],
            name=doc["name"],
            category=ProductCategory(doc["category"]),
            price=Money(Decimal(str(price))),
            qty=int(doc["qty"]),
        )

    @staticmethod
    def _unavailable(operation: str, exc: PyMongoError) -> StoreUnavailable:
        log.error("store_unavailable", operation=operation, error=str(exc))
        return StoreUnavailable(f"MongoDB {operation} failed: {exc}")
