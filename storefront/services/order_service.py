"""
订单业务服务层
下单时校验并核销优惠券，同时把对应弃单标记为已转化
"""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from storefront.api.exceptions import BusinessException, ValidationException
from storefront.models.order import OrderCreate, OrderPlaced, OrderStatus
from storefront.models.database.order_db import OrderDB
from storefront.repositories.order_repository import OrderRepository
from storefront.services.coupon_service import CouponService
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService

logger = logging.getLogger(__name__)


class OrderService:
    """订单业务服务"""

    def __init__(
        self,
        order_repo: OrderRepository,
        coupon_service: CouponService,
        checkout_service: AbandonedCheckoutService
    ):
        self.order_repo = order_repo
        self.coupon_service = coupon_service
        self.checkout_service = checkout_service

    async def place_order(self, order_data: OrderCreate, user_id: Optional[str] = None) -> OrderPlaced:
        """创建订单"""
        if not order_data.items:
            raise ValidationException("No items in order")

        address = order_data.shipping_address
        if not address or not address.is_complete:
            raise ValidationException("Missing shipping information")

        subtotal = order_data.subtotal
        discount = Decimal("0")

        if order_data.coupon_code:
            validation = await self.coupon_service.validate_coupon(
                order_data.coupon_code, subtotal, user_id
            )
            if not validation.is_valid:
                raise BusinessException(validation.message, validation.status_code, "coupon_rejected")
            discount = validation.discount_amount

        total_amount = subtotal + order_data.shipping_cost - discount

        db_order = OrderDB(
            id=str(uuid.uuid4()),
            user_id=user_id,
            items=[item.model_dump(mode="json", by_alias=True) for item in order_data.items],
            subtotal=subtotal,
            shipping_cost=order_data.shipping_cost,
            discount=discount,
            total_amount=total_amount,
            coupon_code=order_data.coupon_code,
            shipping_address=address.model_dump(mode="json", by_alias=True),
            payment_method=order_data.payment_method.value,
            status=OrderStatus.PENDING.value,
            is_paid=False
        )
        await self.order_repo.create(db_order)

        if order_data.coupon_code:
            await self.coupon_service.record_usage(order_data.coupon_code)

        email = address.email.lower() if address.email else None
        await self.checkout_service.mark_recovered(email=email, phone=address.phone)

        logger.info(f"订单创建成功: {db_order.id} total={total_amount} coupon={order_data.coupon_code}")
        return OrderPlaced(order_id=db_order.id)
