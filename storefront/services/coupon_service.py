"""
优惠券业务服务层
校验逻辑始终读取实时数据，只有后台列表走缓存
"""

import logging
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from storefront.core.config import settings
from storefront.api.exceptions import ValidationException, NotFoundException
from storefront.models.common import format_amount
from storefront.models.coupon import Coupon, CouponCreate, CouponUpdate, CouponValidation
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.services.common_cache import SimpleCache, coupon_cache

logger = logging.getLogger(__name__)


def _rejected(message: str, status_code: int = 400, **extra) -> CouponValidation:
    return CouponValidation(is_valid=False, message=message, status_code=status_code, **extra)


class CouponService:
    """优惠券业务服务"""

    def __init__(
        self,
        coupon_repo: CouponRepository,
        order_repo: OrderRepository,
        cache: Optional[SimpleCache] = None
    ):
        self.coupon_repo = coupon_repo
        self.order_repo = order_repo
        self.cache = cache or coupon_cache
        self.list_cache_key = "list:all"
        self.cache_ttl = settings.coupon_cache_ttl

    async def validate_coupon(
        self,
        code: Optional[str],
        cart_total: Decimal,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> CouponValidation:
        """按顺序校验优惠券，任一条件不满足立即返回"""
        if now is None:
            now = datetime.now()

        code = (code or "").strip()
        if not code:
            return _rejected("Coupon code is required")

        db_coupon = await self.coupon_repo.get_by_code(code.upper())
        if not db_coupon:
            return _rejected("Invalid coupon code", status_code=404)

        coupon = self.coupon_repo.to_model(db_coupon)

        if not coupon.is_active:
            return _rejected("This coupon is no longer active", coupon=coupon)

        if coupon.start_date and now < coupon.start_date:
            return _rejected("This coupon is not active yet", coupon=coupon)

        if coupon.expiry_date and now > coupon.expiry_date:
            return _rejected("This coupon has expired", coupon=coupon)

        if coupon.usage_limit and coupon.used_count >= coupon.usage_limit:
            return _rejected("This coupon usage limit has been reached", coupon=coupon)

        if coupon.min_purchase_amount and cart_total < coupon.min_purchase_amount:
            return _rejected(
                f"Minimum purchase amount of Rs. {format_amount(coupon.min_purchase_amount)} required",
                coupon=coupon,
                min_purchase_required=coupon.min_purchase_amount
            )

        # 游客无法按人限制使用次数
        if user_id and coupon.max_uses_per_user:
            used = await self.order_repo.count_coupon_uses_by_user(user_id, coupon.code)
            if used >= coupon.max_uses_per_user:
                return _rejected(
                    f"You have already used this coupon maximum {coupon.max_uses_per_user} times.",
                    coupon=coupon
                )

        return CouponValidation(
            is_valid=True,
            message="Coupon applied successfully!",
            coupon=coupon,
            discount_amount=coupon.calculate_discount(cart_total)
        )

    async def record_usage(self, code: str) -> bool:
        """订单创建成功后累加使用次数"""
        updated = await self.coupon_repo.increment_used_count(code)
        if updated:
            await self._clear_list_cache()
        else:
            logger.warning(f"累加优惠券使用次数失败，优惠券不存在: {code}")
        return updated

    async def list_coupons(self, use_cache: bool = True) -> List[Coupon]:
        """后台优惠券列表"""
        if use_cache:
            cached = await self.cache.get(self.list_cache_key)
            if cached:
                return [Coupon(**item) for item in cached]

        db_coupons = await self.coupon_repo.list_all()
        coupons = [self.coupon_repo.to_model(db_coupon) for db_coupon in db_coupons]

        if use_cache:
            await self.cache.set(
                self.list_cache_key,
                [coupon.model_dump(mode="json") for coupon in coupons],
                ttl=self.cache_ttl
            )

        return coupons

    async def create_coupon(self, coupon_data: CouponCreate) -> Coupon:
        """创建优惠券"""
        if not coupon_data.code or not coupon_data.discount_value or not coupon_data.discount_type:
            raise ValidationException("Missing required fields")

        if await self.coupon_repo.get_by_code(coupon_data.code):
            raise ValidationException("Coupon code already exists")

        self._check_date_range(coupon_data.start_date, coupon_data.expiry_date)

        db_coupon = await self.coupon_repo.create(coupon_data.model_dump())
        await self._clear_list_cache()

        logger.info(f"优惠券创建成功: {db_coupon.code}")
        return self.coupon_repo.to_model(db_coupon)

    async def update_coupon(self, coupon_id: str, coupon_data: CouponUpdate) -> Coupon:
        """更新优惠券（部分字段）"""
        db_coupon = await self.coupon_repo.get_by_id(coupon_id)
        if not db_coupon:
            raise NotFoundException("Coupon not found")

        values = coupon_data.model_dump(exclude_unset=True)

        new_code = values.get("code")
        if new_code and new_code != db_coupon.code:
            if await self.coupon_repo.get_by_code(new_code):
                raise ValidationException("Coupon code already exists")

        self._check_date_range(
            values.get("start_date", db_coupon.start_date),
            values.get("expiry_date", db_coupon.expiry_date)
        )

        db_coupon = await self.coupon_repo.update(db_coupon, values)
        await self._clear_list_cache()

        return self.coupon_repo.to_model(db_coupon)

    async def delete_coupon(self, coupon_id: str) -> None:
        """删除优惠券"""
        deleted = await self.coupon_repo.delete(coupon_id)
        if not deleted:
            raise NotFoundException("Coupon not found")

        await self._clear_list_cache()

    @staticmethod
    def _check_date_range(start_date: Optional[datetime], expiry_date: Optional[datetime]) -> None:
        if start_date and expiry_date and start_date > expiry_date:
            raise ValidationException("Start date cannot be after expiry date")

    async def _clear_list_cache(self):
        await self.cache.delete_pattern(f"{self.list_cache_key}*")
