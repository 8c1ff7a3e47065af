"""
接口依赖注入：按请求组装仓库与服务
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import get_db_session
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.abandoned_checkout_repository import AbandonedCheckoutRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.services.coupon_service import CouponService
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService
from storefront.services.product_service import ProductService
from storefront.services.order_service import OrderService
from storefront.services.email_service import EmailService, email_service


def get_email_service() -> EmailService:
    return email_service


def get_coupon_service(db: AsyncSession = Depends(get_db_session)) -> CouponService:
    return CouponService(CouponRepository(db), OrderRepository(db))


def get_checkout_service(
    db: AsyncSession = Depends(get_db_session),
    mailer: EmailService = Depends(get_email_service)
) -> AbandonedCheckoutService:
    return AbandonedCheckoutService(AbandonedCheckoutRepository(db), mailer)


def get_product_service(db: AsyncSession = Depends(get_db_session)) -> ProductService:
    return ProductService(ProductRepository(db))


def get_order_service(
    db: AsyncSession = Depends(get_db_session),
    coupon_service: CouponService = Depends(get_coupon_service),
    checkout_service: AbandonedCheckoutService = Depends(get_checkout_service)
) -> OrderService:
    return OrderService(OrderRepository(db), coupon_service, checkout_service)
