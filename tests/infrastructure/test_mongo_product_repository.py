"""Tests for the MongoDB product store, against an in-memory collection."""

from decimal import Decimal

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128

from catalog.domain.exceptions import (
    ProductNameConflict,
    StoreUnavailable,
    ValidationError,
)
from catalog.domain.model.product import Product, ProductCategory
from catalog.domain.model.value_objects import Money
from catalog.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from tests.fakes import FakeCollection


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def repo(collection):
    repo = MongoProductRepository(collection)
    repo.ensure_indexes()
    return repo


def _product(name="Tennis Racket", qty=80, price="10.00"):
    return Product.create(name, ProductCategory.SPORTS, Money.of(price), qty)


class TestDocuments:

    def test_price_stored_as_decimal128(self, repo, collection):
        product = _product(price="19.99")
        repo.save(product)
        doc = collection.docs[product.id]
        assert doc["price"] == Decimal128("19.99")
        assert doc["category"] == "SPORTS"

    def test_round_trip(self, repo):
        product = _product(price="19.99")
        repo.save(product)
        loaded = repo.get_by_id(product.id)
        assert loaded.id == product.id
        assert loaded.price.amount == Decimal("19.99")
        assert loaded.qty == 80

    def test_legacy_numeric_price(self, repo, collection):
        pid = ObjectId()
        collection.docs[pid] = {
            "_id": pid, "name": "Ball", "category": "SPORTS", "price": 2.5, "qty": 3,
        }
        assert repo.get_by_id(pid).price.amount == Decimal("2.5")

    def test_queries(self, repo):
        product = _product()
        repo.save(product)
        assert repo.exists_by_id(product.id)
        assert repo.exists_by_name("Tennis Racket")
        assert not repo.exists_by_name("Ball")
        assert repo.get_by_name("Tennis Racket").id == product.id
        assert [p.id for p in repo.list_all()] == [product.id]

    def test_delete(self, repo):
        product = _product()
        repo.save(product)
        repo.delete_by_id(product.id)
        assert repo.get_by_id(product.id) is None


class TestNameUniqueness:

    def test_duplicate_name_conflicts(self, repo):
        repo.save(_product("Ball"))
        with pytest.raises(ProductNameConflict):
            repo.save(_product("Ball"))

    def test_resaving_same_product_is_fine(self, repo):
        product = _product("Ball")
        repo.save(product)
        product.qty = 1
        repo.save(product)
        assert repo.get_by_id(product.id).qty == 1


class TestPriceRange:

    def test_price_beyond_decimal128_precision(self, repo, collection):
        product = _product(price="1." + "0" * 40 + "1")
        with pytest.raises(ValidationError, match="cannot be stored exactly"):
            repo.save(product)
        assert collection.docs == {}

    def test_34_digit_price_fits(self, repo):
        price = "1." + "0" * 32 + "1"
        product = _product(price=price)
        repo.save(product)
        assert repo.get_by_id(product.id).price.amount == Decimal(price)


class TestUpdateQuantity:

    def test_matching_expectation(self, repo):
        product = _product(qty=80)
        repo.save(product)
        assert repo.update_quantity(product.id, 75, expected_qty=80)
        assert repo.get_by_id(product.id).qty == 75

    def test_stale_expectation(self, repo):
        product = _product(qty=80)
        repo.save(product)
        assert not repo.update_quantity(product.id, 75, expected_qty=79)
        assert repo.get_by_id(product.id).qty == 80

    def test_missing_product(self, repo):
        assert not repo.update_quantity(ObjectId(), 1)


class TestUnavailable:

    @pytest.mark.parametrize(
        "call",
        [
            lambda r: r.get_by_id(ObjectId()),
            lambda r: r.get_by_name("x"),
            lambda r: r.exists_by_id(ObjectId()),
            lambda r: r.list_all(),
            lambda r: r.save(_product()),
            lambda r: r.delete_by_id(ObjectId()),
            lambda r: r.update_quantity(ObjectId(), 1, expected_qty=2),
            lambda r: r.ensure_indexes(),
        ],
    )
    def test_driver_errors_become_store_unavailable(self, repo, collection, call):
        collection.down = True
        with pytest.raises(StoreUnavailable):
            call(repo)
