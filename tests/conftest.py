"""
测试配置文件 - pytest fixtures和共用配置
"""

import pytest
import pytest_asyncio
import jwt
from decimal import Decimal
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.config import settings
from storefront.core.database import Base
import storefront.models.database  # noqa: F401
from storefront.models.database.coupon_db import CouponDB
from storefront.models.abandoned_checkout import AbandonedCheckout, CartItem


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """测试数据库引擎 - 使用内存SQLite，每个用例独立建表"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,  # 设为True可以看到SQL语句
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_db_engine) -> AsyncSession:
    """测试数据库会话"""
    async_session_maker = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@pytest.fixture
def sample_coupon_db():
    """示例优惠券：满1000减10%"""
    now = datetime.now()
    return CouponDB(
        id="coupon_001",
        code="SAVE10",
        discount_type="percentage",
        discount_value=Decimal("10"),
        min_purchase_amount=Decimal("1000"),
        start_date=now - timedelta(days=1),
        expiry_date=now + timedelta(days=30),
        usage_limit=100,
        used_count=5,
        max_uses_per_user=1,
        is_active=True,
        created_at=now,
        updated_at=now
    )


@pytest.fixture
def sample_cart():
    """示例弃单快照"""
    return AbandonedCheckout(
        id="cart_001",
        email="ali@example.com",
        name="Ali",
        cart_items=[
            CartItem(product_id="prod_001", name="Linen Shirt", price=Decimal("2500"), quantity=2),
            CartItem(product_id="prod_002", name="Cotton Scarf", price=Decimal("899.50"), quantity=1),
        ],
        total_amount=Decimal("5899.50")
    )


def make_token(**claims) -> str:
    """签发测试用会话令牌"""
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture
def admin_token():
    return make_token(userId="admin_001", role="admin")


@pytest.fixture
def customer_token():
    return make_token(userId="user_001", role="customer")
