"""
数据模型校验与序列化测试
"""

from decimal import Decimal
from datetime import datetime, timezone

from storefront.models.common import format_amount, to_naive_local
from storefront.models.coupon import Coupon, CouponCreate, CouponValidation, CouponValidationResponse
from storefront.models.abandoned_checkout import CheckoutCaptureRequest
from storefront.models.order import OrderCreate


class TestCouponModels:
    """优惠券模型测试"""

    def test_percentage_discount(self):
        coupon = Coupon(id="c1", code="SAVE10", discount_type="percentage", discount_value=Decimal("10"))
        assert coupon.calculate_discount(Decimal("2000")) == Decimal("200")

    def test_full_percentage_capped(self):
        """折扣不超过购物车总额"""
        coupon = Coupon(id="c1", code="ALL", discount_type="percentage", discount_value=Decimal("150"))
        assert coupon.calculate_discount(Decimal("800")) == Decimal("800")

    def test_create_normalizes_code_and_dates(self):
        aware = datetime(2024, 6, 1, 0, 0, tzinfo=timezone.utc)
        data = CouponCreate(code="  summer24 ", discountType="fixed", discountValue=300, expiryDate=aware)

        assert data.code == "SUMMER24"
        assert data.discount_type == "fixed"
        assert data.expiry_date.tzinfo is None
        assert data.expiry_date == to_naive_local(aware)

    def test_validation_response_camel_case(self):
        """校验接口响应使用驼峰字段，金额输出为数字"""
        coupon = Coupon(id="c1", code="SAVE10", discount_type="percentage", discount_value=Decimal("10"))
        validation = CouponValidation(
            is_valid=True,
            message="Coupon applied successfully!",
            coupon=coupon,
            discount_amount=Decimal("200")
        )

        data = CouponValidationResponse.from_validation(validation).model_dump(mode="json", by_alias=True)

        assert data == {
            "valid": True,
            "message": "Coupon applied successfully!",
            "discountAmount": 200.0,
            "discountType": "percentage",
            "code": "SAVE10"
        }

    def test_rejected_response_has_no_discount(self):
        validation = CouponValidation(is_valid=False, message="Invalid coupon code", status_code=404)

        data = CouponValidationResponse.from_validation(validation).model_dump(
            mode="json", by_alias=True, exclude_none=True
        )

        assert data == {"valid": False, "message": "Invalid coupon code"}


class TestRequestModels:

    def test_capture_normalizes_contact(self):
        capture = CheckoutCaptureRequest(email=" Ali@Example.COM ", phone="")

        assert capture.email == "ali@example.com"
        assert capture.phone is None
        assert capture.has_contact is True

    def test_order_subtotal(self):
        order = OrderCreate(
            items=[
                {"product_id": "p1", "name": "Shirt", "price": "1499.50", "quantity": 2},
                {"product_id": "p2", "name": "Cap", "price": 1, "quantity": 1},
            ],
            couponCode=" save10 "
        )

        assert order.subtotal == Decimal("3000.00")
        assert order.coupon_code == "SAVE10"


def test_format_amount():
    """金额展示格式"""
    assert format_amount(Decimal("1000.00")) == "1000"
    assert format_amount(Decimal("12.50")) == "12.5"
    assert format_amount(1000) == "1000"
