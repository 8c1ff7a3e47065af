"""
订单数据库操作层
"""

from typing import Optional

from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.order import NON_COUNTING_STATUSES
from storefront.models.database.order_db import OrderDB


class OrderRepository:
    """订单数据库操作层"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, order_id: str) -> Optional[OrderDB]:
        result = await self.db.execute(
            select(OrderDB).where(OrderDB.id == order_id)
        )
        return result.scalar_one_or_none()

    async def create(self, db_order: OrderDB) -> OrderDB:
        """保存订单"""
        self.db.add(db_order)
        await self.db.flush()
        return db_order

    async def count_coupon_uses_by_user(self, user_id: str, coupon_code: str) -> int:
        """用户使用某优惠券的有效订单数（不含已取消和已退货）"""
        result = await self.db.execute(
            select(func.count(OrderDB.id)).where(
                and_(
                    OrderDB.user_id == user_id,
                    OrderDB.coupon_code == coupon_code,
                    OrderDB.status.notin_(NON_COUNTING_STATUSES)
                )
            )
        )
        return result.scalar() or 0
