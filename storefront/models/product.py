"""
商品排行相关数据模型
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from storefront.models.common import CamelModel, Money


class TrendingProduct(CamelModel):
    """热销榜商品投影"""

    id: str
    name: str
    price: Money
    compare_at_price: Optional[Money] = Decimal("0")
    image_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    slug: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    stock: int = 0
    review_count: int = 0
    average_rating: float = 0


class TrendingPage(CamelModel):
    """热销榜分页结果"""

    products: List[TrendingProduct] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False
    page: int = 1
