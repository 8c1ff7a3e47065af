"""
数据库模型包初始化文件
导入即完成全部数据表在 Base.metadata 上的注册
"""

from .coupon_db import CouponDB
from .abandoned_checkout_db import AbandonedCheckoutDB
from .order_db import OrderDB
from .product_db import ProductDB, ReviewDB

__all__ = [
    "CouponDB",
    "AbandonedCheckoutDB",
    "OrderDB",
    "ProductDB",
    "ReviewDB"
]
