"""
仓库包初始化文件 - 数据库访问层
"""

from .coupon_repository import CouponRepository
from .abandoned_checkout_repository import AbandonedCheckoutRepository
from .product_repository import ProductRepository
from .order_repository import OrderRepository

__all__ = [
    "CouponRepository",
    "AbandonedCheckoutRepository",
    "ProductRepository",
    "OrderRepository"
]
