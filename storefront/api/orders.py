"""
订单接口
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_order_service
from storefront.core.security import get_optional_user_id
from storefront.models.order import OrderCreate, OrderPlaced
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["订单"])


@router.post("", response_model=OrderPlaced, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate,
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: OrderService = Depends(get_order_service)
):
    """下单（支持游客）"""
    return await service.place_order(payload, user_id)
