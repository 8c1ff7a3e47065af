"""
服务包初始化文件
"""

from .common_cache import SimpleCache, coupon_cache
from .email_service import EmailService, EmailDeliveryError, email_service

__all__ = [
    "SimpleCache",
    "coupon_cache",
    "EmailService",
    "EmailDeliveryError",
    "email_service"
]
