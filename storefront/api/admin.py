"""
后台弃单管理接口
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront.api.dependencies import get_checkout_service
from storefront.api.exceptions import BusinessException
from storefront.core.security import require_admin
from storefront.models.abandoned_checkout import AbandonedCheckout, RecoveryEmailRequest
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/abandoned",
    tags=["后台-弃单"],
    dependencies=[Depends(require_admin)]
)


@router.get("", response_model=List[AbandonedCheckout])
async def list_abandoned_checkouts(service: AbandonedCheckoutService = Depends(get_checkout_service)):
    """最近更新的弃单"""
    return await service.list_recent()


@router.post("/email")
async def send_recovery_email(
    payload: RecoveryEmailRequest,
    service: AbandonedCheckoutService = Depends(get_checkout_service)
):
    """手动发送挽回邮件"""
    try:
        await service.send_recovery_email(payload.cart_id)
    except BusinessException:
        raise
    except Exception as e:
        logger.error(f"挽回邮件发送失败 cart_id={payload.cart_id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to send email"}
        )

    return {"success": True, "message": "Recovery email sent successfully"}


@router.get("/{cart_id}", response_model=AbandonedCheckout)
async def get_abandoned_checkout(
    cart_id: str,
    service: AbandonedCheckoutService = Depends(get_checkout_service)
):
    return await service.get_checkout(cart_id)
