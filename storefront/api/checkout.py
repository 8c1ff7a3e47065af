"""
结账弃单接口
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront.api.dependencies import get_checkout_service
from storefront.api.exceptions import BusinessException
from storefront.models.abandoned_checkout import CheckoutCaptureRequest, RecoveredCart
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["结账"])


@router.post("/capture")
async def capture_checkout(
    payload: CheckoutCaptureRequest,
    service: AbandonedCheckoutService = Depends(get_checkout_service)
):
    """结账页填写过程中采集购物车"""
    try:
        await service.capture(payload)
    except BusinessException:
        raise
    except Exception as e:
        logger.exception(f"弃单采集失败: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Error"}
        )

    return {"success": True}


@router.get("/recover/{cart_id}", response_model=RecoveredCart)
async def recover_checkout(
    cart_id: str,
    service: AbandonedCheckoutService = Depends(get_checkout_service)
):
    """挽回链接：返回购物车快照供前端恢复"""
    return await service.recover(cart_id)
