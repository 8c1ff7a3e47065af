"""
弃单数据库操作层
"""

import logging
import uuid
from typing import List, Optional, Dict, Any
from datetime import datetime, timedelta

from sqlalchemy import select, update, and_, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.abandoned_checkout import AbandonedCheckout, CheckoutCaptureRequest
from storefront.models.database.abandoned_checkout_db import AbandonedCheckoutDB

logger = logging.getLogger(__name__)


class AbandonedCheckoutRepository:
    """弃单数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, cart_id: str) -> Optional[AbandonedCheckoutDB]:
        result = await self.db.execute(
            select(AbandonedCheckoutDB).where(AbandonedCheckoutDB.id == cart_id)
        )
        return result.scalar_one_or_none()

    async def find_by_contact(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None
    ) -> Optional[AbandonedCheckoutDB]:
        """优先按邮箱查找，没有邮箱时按手机号查找"""
        if email:
            condition = AbandonedCheckoutDB.email == email
        elif phone:
            condition = AbandonedCheckoutDB.phone == phone
        else:
            return None

        result = await self.db.execute(
            select(AbandonedCheckoutDB)
            .where(condition)
            .order_by(desc(AbandonedCheckoutDB.updated_at))
            .limit(1)
        )
        return result.scalars().first()

    async def upsert_by_contact(self, capture: CheckoutCaptureRequest) -> AbandonedCheckoutDB:
        """按联系方式写入或更新弃单，每次采集都重置为未挽回"""
        values = self._capture_values(capture)

        existing = await self.find_by_contact(capture.email, capture.phone)
        if existing:
            return await self._overwrite(existing, values)

        cart = AbandonedCheckoutDB(id=str(uuid.uuid4()), **values)
        try:
            async with self.db.begin_nested():
                self.db.add(cart)
                await self.db.flush()
        except IntegrityError:
            # 同一邮箱并发写入，改为更新已存在的记录
            logger.info(f"弃单并发写入冲突，改为更新: {capture.email}")
            existing = await self.find_by_contact(capture.email, capture.phone)
            if not existing:
                raise
            return await self._overwrite(existing, values)

        return cart

    async def _overwrite(self, cart: AbandonedCheckoutDB, values: Dict[str, Any]) -> AbandonedCheckoutDB:
        for field, value in values.items():
            setattr(cart, field, value)
        cart.updated_at = datetime.now()
        await self.db.flush()
        return cart

    def _capture_values(self, capture: CheckoutCaptureRequest) -> Dict[str, Any]:
        """只覆盖本次提交的字段"""
        values: Dict[str, Any] = {"recovered": False}

        for field in ("email", "phone", "name", "total_amount"):
            value = getattr(capture, field)
            if value is not None:
                values[field] = value

        if capture.cart_items is not None:
            values["cart_items"] = [
                item.model_dump(mode="json", by_alias=True) for item in capture.cart_items
            ]

        return values

    async def mark_clicked(self, cart: AbandonedCheckoutDB, clicked_at: datetime) -> bool:
        """记录首次点击，已点击过的不再更新"""
        if cart.clicked_at:
            return False

        cart.clicked_at = clicked_at
        await self.db.flush()
        return True

    async def find_due_for_recovery(
        self,
        now: datetime,
        min_age: timedelta,
        max_age: timedelta,
        limit: int
    ) -> List[AbandonedCheckoutDB]:
        """待发送挽回邮件的弃单：停留时间在窗口内、有邮箱、未挽回、未通知"""
        query = select(AbandonedCheckoutDB).where(
            and_(
                AbandonedCheckoutDB.updated_at < now - min_age,
                AbandonedCheckoutDB.updated_at > now - max_age,
                AbandonedCheckoutDB.email.isnot(None),
                AbandonedCheckoutDB.email != "",
                AbandonedCheckoutDB.recovered == False,  # noqa: E712
                AbandonedCheckoutDB.recovery_sent_at.is_(None)
            )
        ).order_by(AbandonedCheckoutDB.updated_at).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def mark_recovery_sent(self, cart_id: str, sent_at: datetime) -> bool:
        """记录挽回通知已发送（保存点内执行，失败不影响同一事务的其他记录）"""
        async with self.db.begin_nested():
            result = await self.db.execute(
                update(AbandonedCheckoutDB)
                .where(AbandonedCheckoutDB.id == cart_id)
                .values(
                    recovery_sent_at=sent_at,
                    recovery_count=AbandonedCheckoutDB.recovery_count + 1
                )
            )
        return result.rowcount > 0

    async def mark_recovered(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None
    ) -> int:
        """订单完成后标记对应弃单为已挽回"""
        if email:
            condition = AbandonedCheckoutDB.email == email
        elif phone:
            condition = AbandonedCheckoutDB.phone == phone
        else:
            return 0

        result = await self.db.execute(
            update(AbandonedCheckoutDB)
            .where(and_(condition, AbandonedCheckoutDB.recovered == False))  # noqa: E712
            .values(recovered=True)
        )
        return result.rowcount

    async def list_recent(self, limit: int = 100) -> List[AbandonedCheckoutDB]:
        """后台列表：最近更新的弃单"""
        result = await self.db.execute(
            select(AbandonedCheckoutDB)
            .order_by(desc(AbandonedCheckoutDB.updated_at))
            .limit(limit)
        )
        return list(result.scalars().all())

    def to_model(self, cart: AbandonedCheckoutDB) -> AbandonedCheckout:
        """转换为Pydantic模型"""
        return AbandonedCheckout.model_validate(cart)
