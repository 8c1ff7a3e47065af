"""
热销榜、下单与健康检查接口测试
"""

from decimal import Decimal

from storefront.models.database.product_db import ProductDB
from storefront.models.database.coupon_db import CouponDB


class TestTrendingApi:
    """GET /products/trending"""

    def test_trending_page(self, client, product_repo):
        product_repo.count_listable.return_value = 3
        product_repo.get_trending.return_value = [
            (ProductDB(id="prod_a", name="Linen Shirt", slug="linen-shirt", price=Decimal("2500"), stock=4,
                       category_id="cat_men", images=[]), 5, 4.2),
            (ProductDB(id="prod_b", name="Cotton Scarf", slug="cotton-scarf", price=Decimal("900"), stock=0,
                       category_id="cat_women", images=[]), 3, 3.0),
        ]

        response = client.get("/products/trending", params={"page": 1, "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["hasMore"] is True
        assert data["page"] == 1
        assert [item["id"] for item in data["products"]] == ["prod_a", "prod_b"]
        assert data["products"][0]["reviewCount"] == 5
        assert data["products"][0]["price"] == 2500.0
        product_repo.get_trending.assert_called_once_with(offset=0, limit=2)

    def test_default_limit(self, client, product_repo):
        product_repo.count_listable.return_value = 0

        response = client.get("/products/trending")

        assert response.status_code == 200
        assert response.json() == {"products": [], "total": 0, "hasMore": False, "page": 1}

    def test_limit_out_of_range(self, client):
        assert client.get("/products/trending", params={"limit": 101}).status_code == 400
        assert client.get("/products/trending", params={"page": 0}).status_code == 400

    def test_database_failure(self, client, product_repo):
        product_repo.count_listable.side_effect = RuntimeError("timeout")

        response = client.get("/products/trending")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch trending products"}


class TestOrderApi:
    """POST /orders"""

    def _payload(self, **extra):
        payload = {
            "items": [{"product_id": "prod_a", "name": "Linen Shirt", "price": 2500, "quantity": 2}],
            "shippingAddress": {
                "fullName": "Ali Khan",
                "email": "ali@example.com",
                "phone": "03001234567",
                "address": "12 Mall Road",
                "city": "Lahore"
            },
            "shippingCost": 250
        }
        payload.update(extra)
        return payload

    def test_place_order_with_coupon(self, client, coupon_repo, order_repo, checkout_repo):
        coupon_repo.get_by_code.return_value = CouponDB(
            id="coupon_002", code="FLAT500", discount_type="fixed", discount_value=Decimal("500"),
            min_purchase_amount=Decimal("0"), used_count=0, max_uses_per_user=1, is_active=True
        )
        coupon_repo.increment_used_count.return_value = True

        response = client.post("/orders", json=self._payload(couponCode="flat500"))

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order placed successfully"

        db_order = order_repo.create.call_args.args[0]
        assert db_order.id == data["orderId"]
        assert db_order.total_amount == Decimal("4750")
        coupon_repo.increment_used_count.assert_called_once_with("FLAT500")
        checkout_repo.mark_recovered.assert_called_once_with(email="ali@example.com", phone="03001234567")

    def test_place_order_rejected_coupon(self, client, coupon_repo, order_repo):
        coupon_repo.get_by_code.return_value = None

        response = client.post("/orders", json=self._payload(couponCode="NOPE"))

        assert response.status_code == 404
        assert response.json()["error"] == "Invalid coupon code"
        order_repo.create.assert_not_called()

    def test_place_order_without_items(self, client):
        response = client.post("/orders", json=self._payload(items=[]))

        assert response.status_code == 400
        assert response.json()["error"] == "No items in order"

    def test_invalid_quantity(self, client):
        payload = self._payload()
        payload["items"][0]["quantity"] = 0

        response = client.post("/orders", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "items.0.quantity"


class TestHealthApi:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"
