"""Tests for translating failures into transport outcomes."""

import time
from decimal import Decimal
from http import HTTPStatus

import pytest
from bson import ObjectId

from catalog.application.dto import ReconciliationReport
from catalog.application.outcome import Aborted, Completed, Dropped, Failed
from catalog.domain.exceptions import (
    AccessDenied,
    ConcurrentModification,
    InsufficientQuantity,
    MalformedReference,
    ProductNameConflict,
    ProductNotFound,
    StoreUnavailable,
    ValidationError,
)
from catalog.domain.model.order_item import Direction
from catalog.infrastructure.errors import (
    Disposition,
    disposition_for,
    error_body,
    http_status_for,
)


class TestHttpStatus:

    @pytest.mark.parametrize(
        "exc, status",
        [
            (ProductNotFound(ObjectId()), HTTPStatus.NOT_FOUND),
            (InsufficientQuantity("x", 1, 2), HTTPStatus.BAD_REQUEST),
            (ProductNameConflict("Laptop"), HTTPStatus.BAD_REQUEST),
            (MalformedReference("x"), HTTPStatus.BAD_REQUEST),
            (ValidationError("bad"), HTTPStatus.BAD_REQUEST),
            (AccessDenied("USER"), HTTPStatus.FORBIDDEN),
            (StoreUnavailable("down"), HTTPStatus.SERVICE_UNAVAILABLE),
            (ConcurrentModification("x", 3), HTTPStatus.CONFLICT),
            (RuntimeError("boom"), HTTPStatus.INTERNAL_SERVER_ERROR),
        ],
    )
    def test_mapping(self, exc, status):
        assert http_status_for(exc) is status


class TestErrorBody:

    def test_fields(self):
        before = int(time.time() * 1000)
        body = error_body(ProductNotFound("abc"))
        after = int(time.time() * 1000)

        assert body["error"] == "Product not found with ID: abc"
        assert body["status"] == "404 NOT_FOUND"
        assert before <= int(body["timestamp"]) <= after

    def test_unexpected_error_is_generic_server_error(self):
        body = error_body(RuntimeError())
        assert body["status"] == "500 INTERNAL_SERVER_ERROR"
        assert body["error"] == "RuntimeError"


class TestDisposition:

    def test_completed_acked(self):
        assert disposition_for(Completed(Decimal("1"))) is Disposition.ACK

    def test_dropped_acked(self):
        assert disposition_for(Dropped(ProductNotFound("x"))) is Disposition.ACK

    def test_aborted_acked(self):
        outcome = Aborted(StoreUnavailable("down"), ReconciliationReport(Direction.FETCH))
        assert disposition_for(outcome) is Disposition.ACK

    def test_failed_rejected(self):
        assert disposition_for(Failed(RuntimeError())) is Disposition.REJECT
