"""
Unit tests for the cart event weighting rule and in-memory replay.
"""

import pytest

from storefront_service.app.services.cart_service import (
    reconstruct_cart,
    signed_quantity,
)


class TestSignedQuantity:
    @pytest.mark.parametrize(
        "event_type, expected",
        [("added", 3), ("increased", 3), ("removed", -3), ("decreased", -3)],
    )
    def test_known_event_types(self, event_type, expected):
        assert signed_quantity(event_type, 3) == expected

    def test_unknown_event_type_counts_zero(self):
        assert signed_quantity("viewed", 5) == 0


class TestReconstructCart:
    def test_empty_log_is_empty_cart(self):
        assert reconstruct_cart([]) == {}

    def test_sums_per_product(self):
        events = [
            {"product_id": 1, "quantity": 2, "event_type": "added"},
            {"product_id": 2, "quantity": 1, "event_type": "added"},
            {"product_id": 1, "quantity": 1, "event_type": "increased"},
            {"product_id": 1, "quantity": 1, "event_type": "decreased"},
        ]

        assert reconstruct_cart(events) == {1: 2, 2: 1}

    def test_fully_removed_product_is_dropped(self):
        events = [
            {"product_id": 7, "quantity": 1, "event_type": "added"},
            {"product_id": 7, "quantity": 1, "event_type": "removed"},
        ]

        assert reconstruct_cart(events) == {}

    def test_over_removal_never_yields_negative_rows(self):
        events = [
            {"product_id": 3, "quantity": 1, "event_type": "added"},
            {"product_id": 3, "quantity": 4, "event_type": "removed"},
            {"product_id": 4, "quantity": 2, "event_type": "added"},
        ]

        assert reconstruct_cart(events) == {4: 2}

    def test_removal_before_add_still_nets_out(self):
        # The log is a plain sum: order of events does not matter
        events = [
            {"product_id": 5, "quantity": 1, "event_type": "removed"},
            {"product_id": 5, "quantity": 3, "event_type": "added"},
        ]

        assert reconstruct_cart(events) == {5: 2}

    def test_unknown_event_types_are_ignored(self):
        events = [
            {"product_id": 9, "quantity": 2, "event_type": "added"},
            {"product_id": 9, "quantity": 10, "event_type": "checked_out"},
        ]

        assert reconstruct_cart(events) == {9: 2}
