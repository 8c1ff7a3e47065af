"""
商品接口
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.api.dependencies import get_product_service
from storefront.models.product import TrendingPage
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["商品"])


@router.get("/trending", response_model=TrendingPage)
async def trending_products(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.trending_default_limit, ge=1, le=100),
    service: ProductService = Depends(get_product_service)
):
    """热销榜（按评价数排序）"""
    try:
        return await service.get_trending(page=page, limit=limit)
    except Exception as e:
        logger.exception(f"获取热销榜失败: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch trending products"}
        )
