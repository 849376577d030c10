"""Unit tests for stock movement directions."""

from catalog.domain.model.order_item import Direction


class TestDirection:

    def test_restore_adds(self):
        assert Direction.RESTORE.apply(80, 5) == 85

    def test_fetch_subtracts(self):
        assert Direction.FETCH.apply(80, 5) == 75

    def test_fetch_is_not_clamped_at_zero(self):
        assert Direction.FETCH.apply(2, 5) == -3
