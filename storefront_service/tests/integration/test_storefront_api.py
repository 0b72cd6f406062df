"""
End-to-end API tests with the database tracking sink.
"""

import asyncio

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from storefront_service.app.core.database import database_manager
from storefront_service.app.models import CartEvent, PageHit


def _count(model, *where) -> int:
    async def run():
        async with database_manager.async_session_maker() as session:
            query = select(func.count()).select_from(model)
            for clause in where:
                query = query.where(clause)
            return (await session.execute(query)).scalar()

    return asyncio.run(run())


class TestCatalogAPI:
    def test_first_page_uses_default_limit(self, seeded_client: TestClient):
        response = seeded_client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert len(data["products"]) == 20
        assert data["pagination"] == {
            "page": 1,
            "limit": 20,
            "total": 25,
            "totalPages": 2,
        }
        assert [p["product_id"] for p in data["products"]] == list(range(1, 21))

    def test_second_page(self, seeded_client: TestClient):
        data = seeded_client.get("/api/products?page=2&limit=20").json()

        assert [p["product_id"] for p in data["products"]] == [21, 22, 23, 24, 25]
        assert data["pagination"]["page"] == 2

    def test_garbage_paging_falls_back_to_defaults(self, seeded_client: TestClient):
        data = seeded_client.get("/api/products?page=abc&limit=0").json()

        assert data["pagination"]["page"] == 1
        assert data["pagination"]["limit"] == 20

    def test_fractional_page_truncates(self, seeded_client: TestClient):
        data = seeded_client.get("/api/products?page=2.5&limit=10").json()

        assert data["pagination"]["page"] == 2
        assert [p["product_id"] for p in data["products"]] == list(range(11, 21))

    def test_page_past_the_end_is_empty(self, seeded_client: TestClient):
        data = seeded_client.get("/api/products?page=9&limit=10").json()

        assert data["products"] == []
        assert data["pagination"]["totalPages"] == 3

    def test_empty_catalog(self, client: TestClient):
        data = client.get("/api/products").json()

        assert data["products"] == []
        assert data["pagination"]["total"] == 0
        assert data["pagination"]["totalPages"] == 0

    def test_listing_records_products_page_hit(self, seeded_client: TestClient):
        seeded_client.get("/api/products")
        seeded_client.get("/api/products?page=2")

        assert _count(PageHit, PageHit.page_name == "products") == 2

    def test_product_detail(self, seeded_client: TestClient):
        response = seeded_client.get("/api/products/3")

        assert response.status_code == 200
        product = response.json()
        assert product["product_id"] == 3
        assert product["name"] == "Product 3"
        assert product["category"] == "Electronics"
        assert float(product["price"]) == 13.0
        assert product["stock_quantity"] == 103

    def test_unknown_product_is_404_but_click_is_recorded(
        self, seeded_client: TestClient
    ):
        response = seeded_client.get("/api/products/9999")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Product not found"

        summary = seeded_client.get("/api/analytics/summary").json()
        assert summary["totalClicks"] == 1

    def test_non_numeric_product_id_is_422(self, seeded_client: TestClient):
        response = seeded_client.get("/api/products/abc")

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "validation_error"


class TestCartAPI:
    def test_add_then_get_cart(self, seeded_client: TestClient):
        response = seeded_client.post("/api/cart/add", json={"productId": 2, "quantity": 1})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product added to cart"}

        seeded_client.post("/api/cart/add", json={"productId": 2})
        seeded_client.post("/api/cart/add", json={"productId": 5, "quantity": 3})

        items = seeded_client.get("/api/cart").json()["cartItems"]
        assert [(i["product_id"], i["quantity"]) for i in items] == [(2, 2), (5, 3)]
        assert items[0]["name"] == "Product 2"
        assert items[0]["image_url"] == "https://img.example.com/2.png"

    def test_remove_nets_out(self, seeded_client: TestClient):
        seeded_client.post("/api/cart/add", json={"productId": 4, "quantity": 2})
        response = seeded_client.post("/api/cart/remove", json={"productId": 4})

        assert response.json() == {
            "success": True,
            "message": "Product removed from cart",
        }
        items = seeded_client.get("/api/cart").json()["cartItems"]
        assert [(i["product_id"], i["quantity"]) for i in items] == [(4, 1)]

        seeded_client.post("/api/cart/remove", json={"productId": 4, "quantity": 5})
        assert seeded_client.get("/api/cart").json() == {"cartItems": []}

    def test_zero_quantity_counts_as_one(self, seeded_client: TestClient):
        seeded_client.post("/api/cart/add", json={"productId": 1, "quantity": 0})

        assert _count(CartEvent, CartEvent.quantity == 1) == 1

    def test_negative_quantity_is_rejected(self, seeded_client: TestClient):
        response = seeded_client.post(
            "/api/cart/add", json={"productId": 1, "quantity": -1}
        )

        assert response.status_code == 422
        assert _count(CartEvent) == 0

    def test_viewing_cart_records_page_hit(self, seeded_client: TestClient):
        seeded_client.get("/api/cart")

        assert _count(PageHit, PageHit.page_name == "cart") == 1


class TestTrackingAPI:
    def test_impression(self, seeded_client: TestClient):
        response = seeded_client.post("/api/impressions", json={"productId": 7})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert seeded_client.get("/api/analytics/summary").json()["totalImpressions"] == 1

    def test_impression_requires_product_id(self, seeded_client: TestClient):
        assert seeded_client.post("/api/impressions", json={}).status_code == 422


class TestOrdersAPI:
    def test_place_order(self, seeded_client: TestClient):
        cart_items = [
            {"product_id": 1, "name": "Product 1", "price": "11.00", "quantity": 2},
            {"product_id": 3, "name": "Product 3", "price": 13.5, "quantity": 1},
        ]

        response = seeded_client.post("/api/orders", json={"cartItems": cart_items})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order placed successfully!"
        assert data["total"] == "35.50"
        assert isinstance(data["orderId"], int)

    def test_empty_cart_is_400(self, seeded_client: TestClient):
        for body in ({"cartItems": []}, {}):
            response = seeded_client.post("/api/orders", json=body)

            assert response.status_code == 400
            assert response.json()["error"]["message"] == "Cart is empty"

    def test_missing_body_is_empty_cart(self, seeded_client: TestClient):
        response = seeded_client.post("/api/orders")

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "cart_error"


class TestAnalyticsAPI:
    def test_summary_counts(self, seeded_client: TestClient):
        seeded_client.get("/api/products/1")
        seeded_client.get("/api/products/2")
        seeded_client.post("/api/impressions", json={"productId": 1})
        seeded_client.post(
            "/api/orders",
            json={"cartItems": [{"product_id": 1, "price": "1.00", "quantity": 1}]},
        )

        assert seeded_client.get("/api/analytics/summary").json() == {
            "totalProducts": 25,
            "totalOrders": 1,
            "totalClicks": 2,
            "totalImpressions": 1,
        }


class TestServiceEndpoints:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        report = response.json()
        assert report["status"] == "healthy"
        assert report["checks"]["database"]["status"] == "healthy"
        assert report["checks"]["event_bus"]["enabled"] is False
        assert report["tracking_sink"] == "database"

    def test_correlation_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"
        assert response.headers["X-Request-ID"]

    def test_error_body_carries_correlation_id(self, client: TestClient):
        response = client.get(
            "/api/products/1", headers={"X-Correlation-ID": "trace-me"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["correlation_id"] == "trace-me"
