"""
数据模型包初始化文件
"""

from .coupon import (
    Coupon,
    CouponCreate,
    CouponUpdate,
    CouponValidation,
    CouponValidationRequest,
    CouponValidationResponse,
    DiscountType
)
from .abandoned_checkout import (
    AbandonedCheckout,
    CartItem,
    CheckoutCaptureRequest,
    RecoveredCart,
    SweepResult
)
from .product import TrendingProduct, TrendingPage
from .order import OrderCreate, OrderPlaced, OrderStatus, PaymentMethod

__all__ = [
    "Coupon",
    "CouponCreate",
    "CouponUpdate",
    "CouponValidation",
    "CouponValidationRequest",
    "CouponValidationResponse",
    "DiscountType",
    "AbandonedCheckout",
    "CartItem",
    "CheckoutCaptureRequest",
    "RecoveredCart",
    "SweepResult",
    "TrendingProduct",
    "TrendingPage",
    "OrderCreate",
    "OrderPlaced",
    "OrderStatus",
    "PaymentMethod"
]
