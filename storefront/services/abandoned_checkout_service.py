"""
弃单挽回业务服务层
结账页采集购物车、挽回链接回填购物车、定时批量发送挽回邮件
"""

import asyncio
from typing import List, Optional
from datetime import datetime, timedelta

import structlog

from storefront.core.config import settings
from storefront.api.exceptions import ValidationException, NotFoundException
from storefront.models.abandoned_checkout import (
    AbandonedCheckout,
    CheckoutCaptureRequest,
    RecoveredCart,
    SweepItemResult,
    SweepResult,
)
from storefront.repositories.abandoned_checkout_repository import AbandonedCheckoutRepository
from storefront.services.email_service import EmailService

logger = structlog.get_logger(__name__)


class AbandonedCheckoutService:
    """弃单挽回服务"""

    def __init__(self, checkout_repo: AbandonedCheckoutRepository, email_service: EmailService):
        self.checkout_repo = checkout_repo
        self.email_service = email_service
        self.min_age = timedelta(hours=settings.abandoned_min_age_hours)
        self.max_age = timedelta(hours=settings.abandoned_max_age_hours)
        self.batch_size = settings.abandoned_batch_size

    async def capture(self, capture: CheckoutCaptureRequest) -> AbandonedCheckout:
        """采集结账页购物车，同一联系方式重复采集视为新的弃单"""
        if not capture.has_contact:
            raise ValidationException("Missing contact info")

        cart = await self.checkout_repo.upsert_by_contact(capture)
        return self.checkout_repo.to_model(cart)

    async def recover(self, cart_id: str, now: Optional[datetime] = None) -> RecoveredCart:
        """打开挽回链接：返回购物车快照，仅首次访问记录点击时间"""
        cart = await self.checkout_repo.get_by_id(cart_id)
        if not cart:
            raise NotFoundException("Cart not found")

        if await self.checkout_repo.mark_clicked(cart, now or datetime.now()):
            logger.info("abandoned cart link clicked", cart_id=cart_id)

        return RecoveredCart(
            id=cart.id,
            cart_items=cart.cart_items or [],
            total_amount=cart.total_amount or 0,
            clicked_at=cart.clicked_at
        )

    async def run_recovery_sweep(self, now: Optional[datetime] = None) -> SweepResult:
        """定时任务：给窗口期内未转化的弃单各发一次挽回邮件"""
        if now is None:
            now = datetime.now()

        carts = await self.checkout_repo.find_due_for_recovery(
            now=now,
            min_age=self.min_age,
            max_age=self.max_age,
            limit=self.batch_size
        )
        logger.info("abandoned carts due for recovery", count=len(carts))

        snapshots = [self.checkout_repo.to_model(cart) for cart in carts]
        # 会话不支持并发写入，邮件并发发送，记录发送时间逐个进行
        stamp_lock = asyncio.Lock()
        results: List[SweepItemResult] = list(
            await asyncio.gather(*(self._notify(cart, stamp_lock) for cart in snapshots))
        )

        sent = sum(1 for result in results if result.status == "sent")
        logger.info("abandoned cart sweep finished", processed=len(results), sent=sent)

        return SweepResult(success=True, processed=len(results), sent=sent, results=results)

    async def _notify(self, cart: AbandonedCheckout, stamp_lock: asyncio.Lock) -> SweepItemResult:
        # 发送和记录作为一个整体，单个失败不影响同批次其他弃单
        try:
            await self.email_service.send_abandoned_cart_email(cart.email, cart)
            async with stamp_lock:
                await self.checkout_repo.mark_recovery_sent(cart.id, datetime.now())
            return SweepItemResult(id=cart.id, status="sent")
        except Exception as e:
            logger.error("abandoned cart email failed", cart_id=cart.id, error=str(e))
            return SweepItemResult(id=cart.id, status="failed", error=str(e))

    async def send_recovery_email(self, cart_id: Optional[str]) -> AbandonedCheckout:
        """后台手动发送挽回邮件，不受时间窗口和已发送限制"""
        if not cart_id:
            raise ValidationException("Cart ID is required")

        cart = await self.checkout_repo.get_by_id(cart_id)
        if not cart:
            raise NotFoundException("Cart not found")

        if not cart.email:
            raise ValidationException("Cart has no email address")

        logger.info("sending abandoned cart email", cart_id=cart_id)
        snapshot = self.checkout_repo.to_model(cart)
        await self.email_service.send_abandoned_cart_email(cart.email, snapshot)

        await self.checkout_repo.mark_recovery_sent(cart_id, datetime.now())
        return snapshot

    async def list_recent(self) -> List[AbandonedCheckout]:
        carts = await self.checkout_repo.list_recent(settings.abandoned_admin_list_limit)
        return [self.checkout_repo.to_model(cart) for cart in carts]

    async def get_checkout(self, cart_id: str) -> AbandonedCheckout:
        cart = await self.checkout_repo.get_by_id(cart_id)
        if not cart:
            raise NotFoundException("Abandoned cart not found")
        return self.checkout_repo.to_model(cart)

    async def mark_recovered(self, email: Optional[str], phone: Optional[str]) -> int:
        """下单成功后标记弃单已转化"""
        updated = await self.checkout_repo.mark_recovered(email=email, phone=phone)
        if updated:
            logger.info("abandoned cart converted", email=email, phone=phone)
        return updated
