"""
优惠券接口
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront.api.dependencies import get_coupon_service
from storefront.core.security import get_optional_user_id, require_admin
from storefront.models.coupon import (
    Coupon,
    CouponCreate,
    CouponUpdate,
    CouponValidationRequest,
    CouponValidationResponse,
)
from storefront.services.coupon_service import CouponService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coupons", tags=["优惠券"])


@router.post("/validate", response_model=CouponValidationResponse, response_model_exclude_none=True)
async def validate_coupon(
    payload: CouponValidationRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: CouponService = Depends(get_coupon_service)
):
    """结账页校验优惠券并计算折扣"""
    try:
        validation = await service.validate_coupon(payload.code, payload.cart_total, user_id)
    except Exception as e:
        logger.exception(f"优惠券校验异常: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"valid": False, "message": "Failed to validate coupon"}
        )

    response = CouponValidationResponse.from_validation(validation)
    return JSONResponse(
        status_code=validation.status_code,
        content=response.model_dump(mode="json", by_alias=True, exclude_none=True)
    )


@router.get("", response_model=List[Coupon], dependencies=[Depends(require_admin)])
async def list_coupons(service: CouponService = Depends(get_coupon_service)):
    return await service.list_coupons()


@router.post(
    "",
    response_model=Coupon,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)]
)
async def create_coupon(payload: CouponCreate, service: CouponService = Depends(get_coupon_service)):
    return await service.create_coupon(payload)


@router.put("/{coupon_id}", response_model=Coupon, dependencies=[Depends(require_admin)])
async def update_coupon(
    coupon_id: str,
    payload: CouponUpdate,
    service: CouponService = Depends(get_coupon_service)
):
    return await service.update_coupon(coupon_id, payload)


@router.delete("/{coupon_id}", dependencies=[Depends(require_admin)])
async def delete_coupon(coupon_id: str, service: CouponService = Depends(get_coupon_service)):
    await service.delete_coupon(coupon_id)
    return {"message": "Coupon deleted successfully"}
