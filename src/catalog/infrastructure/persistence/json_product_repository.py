"""JSON-file-backed implementation of ProductRepository.

Meant for local development and the CLI without a MongoDB server. Every
read-modify-write holds an instance lock, which makes ``update_quantity``
atomic for all workers sharing this repository inside one process.
"""

from __future__ import annotations

import json
import threading
from decimal import Decimal, InvalidOperation
from pathlib import Path

from bson import ObjectId
from bson.errors import InvalidId

from catalog.domain.exceptions import StoreUnavailable, ValidationError
from catalog.domain.model.product import Product, ProductCategory
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository

# What decoding a hand-edited or truncated record can raise.
_RECORD_ERRORS = (KeyError, TypeError, ValueError, InvalidId, InvalidOperation, ValidationError)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: ObjectId) -> Product | None:
        with self._lock:
            return self._load().get(str(product_id))

    def get_by_name(self, name: str) -> Product | None:
        with self._lock:
            for product in self._load().values():
                if product.name == name:
                    return product
        return None

    def list_all(self) -> list[Product]:
        with self._lock:
            return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            products[str(product.id)] = product
            self._persist(products)

    def delete_by_id(self, product_id: ObjectId) -> None:
        with self._lock:
            products = self._load()
            if products.pop(str(product_id), None) is not None:
                self._persist(products)

    def update_quantity(
        self,
        product_id: ObjectId,
        new_qty: int,
        expected_qty: int | None = None,
    ) -> bool:
        with self._lock:
            products = self._load()
            product = products.get(str(product_id))
            if product is None:
                return False
            if expected_qty is not None and product.qty != expected_qty:
                return False
            product.qty = new_qty
            self._persist(products)
            return True

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": str(product.id),
            "name": product.name,
            "category": product.category.value,
            "price": str(product.price.amount),
            "qty": product.qty,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=ObjectId(raw["id"]),
            name=raw["name"],
            category=ProductCategory(raw["category"]),
            price=Money(Decimal(raw["price"])),
            qty=raw["qty"],
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreUnavailable(f"Cannot read {self._file_path}: {exc}") from exc
        try:
            return {item["id"]: self._to_domain(item) for item in raw}
        except _RECORD_ERRORS as exc:
            raise StoreUnavailable(
                f"Corrupt product record in {self._file_path}: {exc!r}"
            ) from exc

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        try:
            self._file_path.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreUnavailable(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
