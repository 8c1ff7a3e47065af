"""
优惠券接口测试
"""

from decimal import Decimal


class TestValidateCouponApi:
    """POST /coupons/validate"""

    def test_applies_discount(self, client, coupon_repo, sample_coupon_db):
        coupon_repo.get_by_code.return_value = sample_coupon_db

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": 2000})

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "message": "Coupon applied successfully!",
            "discountAmount": 200.0,
            "discountType": "percentage",
            "code": "SAVE10"
        }

    def test_below_minimum_purchase(self, client, coupon_repo, sample_coupon_db):
        coupon_repo.get_by_code.return_value = sample_coupon_db

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": 500})

        assert response.status_code == 400
        assert response.json() == {
            "valid": False,
            "message": "Minimum purchase amount of Rs. 1000 required"
        }

    def test_unknown_code(self, client, coupon_repo):
        coupon_repo.get_by_code.return_value = None

        response = client.post("/coupons/validate", json={"code": "NOPE", "cartTotal": 500})

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid coupon code"

    def test_negative_cart_total_rejected(self, client, coupon_repo, sample_coupon_db):
        """购物车金额不能为负"""
        coupon_repo.get_by_code.return_value = sample_coupon_db

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": -500})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "cartTotal"
        coupon_repo.get_by_code.assert_not_called()

    def test_missing_code(self, client):
        response = client.post("/coupons/validate", json={"cartTotal": 500})

        assert response.status_code == 400
        assert response.json() == {"valid": False, "message": "Coupon code is required"}

    def test_per_user_limit_uses_session_cookie(self, client, coupon_repo, order_repo, sample_coupon_db, customer_token):
        """登录用户按会话令牌中的用户ID统计使用次数"""
        coupon_repo.get_by_code.return_value = sample_coupon_db
        order_repo.count_coupon_uses_by_user.return_value = 1
        client.cookies.set("token", customer_token)

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": 2000})

        assert response.status_code == 400
        assert response.json()["message"] == "You have already used this coupon maximum 1 times."
        order_repo.count_coupon_uses_by_user.assert_called_once_with("user_001", "SAVE10")

    def test_invalid_cookie_treated_as_guest(self, client, coupon_repo, order_repo, sample_coupon_db):
        coupon_repo.get_by_code.return_value = sample_coupon_db
        client.cookies.set("token", "not-a-jwt")

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": 2000})

        assert response.status_code == 200
        order_repo.count_coupon_uses_by_user.assert_not_called()

    def test_unexpected_error(self, client, coupon_repo):
        """仓库异常时返回统一错误"""
        coupon_repo.get_by_code.side_effect = RuntimeError("connection reset")

        response = client.post("/coupons/validate", json={"code": "SAVE10", "cartTotal": 2000})

        assert response.status_code == 500
        assert response.json() == {"valid": False, "message": "Failed to validate coupon"}


class TestCouponAdminApi:
    """后台优惠券管理"""

    def test_requires_login(self, client):
        response = client.get("/coupons")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_requires_admin_role(self, client, customer_token):
        client.cookies.set("token", customer_token)

        response = client.get("/coupons")

        assert response.status_code == 403

    def test_list(self, admin_client, coupon_repo, sample_coupon_db):
        coupon_repo.list_all.return_value = [sample_coupon_db]

        response = admin_client.get("/coupons")

        assert response.status_code == 200
        data = response.json()
        assert data[0]["code"] == "SAVE10"
        assert data[0]["minPurchaseAmount"] == 1000.0
        assert data[0]["usedCount"] == 5

    def test_create(self, admin_client, coupon_repo, sample_coupon_db):
        coupon_repo.get_by_code.return_value = None
        coupon_repo.create.return_value = sample_coupon_db

        response = admin_client.post("/coupons", json={
            "code": "save10",
            "discountType": "percentage",
            "discountValue": 10,
            "minPurchaseAmount": 1000
        })

        assert response.status_code == 201
        assert response.json()["id"] == "coupon_001"
        values = coupon_repo.create.call_args.args[0]
        assert values["code"] == "SAVE10"
        assert values["min_purchase_amount"] == Decimal("1000")

    def test_create_missing_fields(self, admin_client):
        response = admin_client.post("/coupons", json={"code": "SAVE10"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_create_invalid_discount_type(self, admin_client):
        """非法枚举值走请求校验"""
        response = admin_client.post("/coupons", json={
            "code": "SAVE10", "discountType": "bogo", "discountValue": 10
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert response.json()["errors"][0]["field"] == "discountType"

    def test_update_not_found(self, admin_client, coupon_repo):
        coupon_repo.get_by_id.return_value = None

        response = admin_client.put("/coupons/missing", json={"isActive": False})

        assert response.status_code == 404
        assert response.json()["error"] == "Coupon not found"

    def test_delete(self, admin_client, coupon_repo):
        coupon_repo.delete.return_value = True

        response = admin_client.delete("/coupons/coupon_001")

        assert response.status_code == 200
        assert response.json() == {"message": "Coupon deleted successfully"}
