"""
接口测试fixtures：用依赖覆盖替换数据库层，不启动应用生命周期
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.api.dependencies import (
    get_coupon_service,
    get_checkout_service,
    get_product_service,
    get_order_service,
)
from storefront.models.coupon import Coupon
from storefront.models.abandoned_checkout import AbandonedCheckout
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.abandoned_checkout_repository import AbandonedCheckoutRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.services.coupon_service import CouponService
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService
from storefront.services.product_service import ProductService
from storefront.services.order_service import OrderService
from storefront.services.email_service import EmailService


@pytest.fixture
def coupon_repo():
    repo = AsyncMock(spec=CouponRepository)
    repo.to_model.side_effect = Coupon.model_validate
    return repo


@pytest.fixture
def order_repo():
    repo = AsyncMock(spec=OrderRepository)
    repo.count_coupon_uses_by_user.return_value = 0
    repo.create.side_effect = lambda db_order: db_order
    return repo


@pytest.fixture
def checkout_repo():
    repo = AsyncMock(spec=AbandonedCheckoutRepository)
    repo.to_model.side_effect = AbandonedCheckout.model_validate
    repo.mark_recovered.return_value = 0
    return repo


@pytest.fixture
def product_repo():
    repo = AsyncMock(spec=ProductRepository)
    repo.to_trending_model.side_effect = ProductRepository(None).to_trending_model
    return repo


@pytest.fixture
def mailer():
    return AsyncMock(spec=EmailService)


@pytest.fixture
def cache():
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    return cache


@pytest.fixture
def client(coupon_repo, order_repo, checkout_repo, product_repo, mailer, cache):
    """测试客户端，服务层使用模拟仓库"""
    coupon_service = CouponService(coupon_repo, order_repo, cache=cache)
    checkout_service = AbandonedCheckoutService(checkout_repo, mailer)

    app.dependency_overrides[get_coupon_service] = lambda: coupon_service
    app.dependency_overrides[get_checkout_service] = lambda: checkout_service
    app.dependency_overrides[get_product_service] = lambda: ProductService(product_repo)
    app.dependency_overrides[get_order_service] = lambda: OrderService(order_repo, coupon_service, checkout_service)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client, admin_token):
    client.cookies.set("token", admin_token)
    return client
