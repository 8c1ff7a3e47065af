"""
优惠券数据库操作层
"""

import uuid
from typing import List, Optional, Dict, Any
from datetime import datetime

from sqlalchemy import select, update, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.coupon import Coupon
from storefront.models.database.coupon_db import CouponDB


class CouponRepository:
    """优惠券数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_code(self, code: str) -> Optional[CouponDB]:
        """根据优惠券代码获取优惠券（代码需已转为大写）"""
        result = await self.db.execute(
            select(CouponDB).where(CouponDB.code == code)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, coupon_id: str) -> Optional[CouponDB]:
        """根据优惠券ID获取优惠券"""
        result = await self.db.execute(
            select(CouponDB).where(CouponDB.id == coupon_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[CouponDB]:
        """全部优惠券，最新创建的在前"""
        result = await self.db.execute(
            select(CouponDB).order_by(desc(CouponDB.created_at))
        )
        return list(result.scalars().all())

    async def create(self, values: Dict[str, Any]) -> CouponDB:
        """创建优惠券"""
        db_coupon = CouponDB(id=str(uuid.uuid4()), **values)
        self.db.add(db_coupon)
        await self.db.flush()
        await self.db.refresh(db_coupon)
        return db_coupon

    async def update(self, db_coupon: CouponDB, values: Dict[str, Any]) -> CouponDB:
        """更新优惠券字段"""
        for field, value in values.items():
            setattr(db_coupon, field, value)
        db_coupon.updated_at = datetime.now()

        await self.db.flush()
        await self.db.refresh(db_coupon)
        return db_coupon

    async def delete(self, coupon_id: str) -> bool:
        """删除优惠券"""
        result = await self.db.execute(
            delete(CouponDB).where(CouponDB.id == coupon_id)
        )
        return result.rowcount > 0

    async def increment_used_count(self, code: str) -> bool:
        """使用次数原子加一（仅在订单创建时调用）"""
        result = await self.db.execute(
            update(CouponDB)
            .where(CouponDB.code == code)
            .values(
                used_count=CouponDB.used_count + 1,
                updated_at=datetime.now()
            )
        )
        return result.rowcount > 0

    def to_model(self, db_coupon: CouponDB) -> Coupon:
        """转换为Pydantic模型"""
        return Coupon.model_validate(db_coupon)
