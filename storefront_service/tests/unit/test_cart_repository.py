"""
Unit tests for the SQL cart-state aggregation, run against SQLite.
"""

from decimal import Decimal

import pytest

from storefront_service.app.models import CartEvent, Product
from storefront_service.app.repository.cart_repository import CartRepository


async def _log(session, *events):
    session.add_all(
        [
            CartEvent(product_id=pid, quantity=qty, event_type=etype)
            for pid, qty, etype in events
        ]
    )
    await session.commit()


class TestCartRepository:
    @pytest.fixture
    async def products(self, db_session):
        rows = [
            Product(product_id=1, name="Lamp", price=Decimal("19.99"), image_url="l.png"),
            Product(product_id=2, name="Desk", price=Decimal("120.00")),
            Product(product_id=3, name="Chair", price=Decimal("45.50")),
        ]
        db_session.add_all(rows)
        await db_session.commit()
        return rows

    @pytest.mark.asyncio
    async def test_empty_log_returns_no_items(self, db_session, products):
        assert await CartRepository(db_session).get_cart_items() == []

    @pytest.mark.asyncio
    async def test_signed_sum_per_product(self, db_session, products):
        await _log(
            db_session,
            (1, 2, "added"),
            (1, 1, "increased"),
            (1, 1, "removed"),
            (2, 1, "added"),
            (2, 1, "decreased"),
            (3, 4, "added"),
        )

        items = await CartRepository(db_session).get_cart_items()

        assert [(i["product_id"], i["quantity"]) for i in items] == [(1, 2), (3, 4)]

    @pytest.mark.asyncio
    async def test_item_carries_product_columns(self, db_session, products):
        await _log(db_session, (1, 1, "added"))

        (item,) = await CartRepository(db_session).get_cart_items()

        assert item["name"] == "Lamp"
        assert Decimal(str(item["price"])) == Decimal("19.99")
        assert item["image_url"] == "l.png"
        assert item["quantity"] == 1

    @pytest.mark.asyncio
    async def test_negative_totals_are_filtered(self, db_session, products):
        await _log(db_session, (2, 1, "added"), (2, 3, "removed"))

        assert await CartRepository(db_session).get_cart_items() == []

    @pytest.mark.asyncio
    async def test_unknown_event_types_contribute_nothing(self, db_session, products):
        await _log(db_session, (3, 2, "added"), (3, 50, "wishlisted"))

        (item,) = await CartRepository(db_session).get_cart_items()
        assert item["quantity"] == 2

    @pytest.mark.asyncio
    async def test_events_for_unknown_products_are_dropped_by_join(
        self, db_session, products
    ):
        await _log(db_session, (999, 1, "added"), (1, 1, "added"))

        items = await CartRepository(db_session).get_cart_items()

        assert [i["product_id"] for i in items] == [1]
