"""
定时任务接口（由外部调度器触发）
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.api.dependencies import get_checkout_service
from storefront.api.exceptions import UnauthorizedException
from storefront.models.abandoned_checkout import SweepResult
from storefront.services.abandoned_checkout_service import AbandonedCheckoutService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["定时任务"])


@router.get("/abandoned-recovery", response_model=SweepResult, response_model_exclude_none=True)
async def abandoned_recovery(
    key: Optional[str] = Query(None),
    service: AbandonedCheckoutService = Depends(get_checkout_service)
):
    """批量发送弃单挽回邮件，建议每30-60分钟调用一次"""
    if settings.cron_secret and key != settings.cron_secret:
        raise UnauthorizedException("Unauthorized")

    try:
        return await service.run_recovery_sweep()
    except Exception as e:
        logger.exception(f"弃单挽回任务失败: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)}
        )
