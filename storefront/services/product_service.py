"""
商品业务服务层
"""

from storefront.models.product import TrendingPage
from storefront.repositories.product_repository import ProductRepository


class ProductService:
    """商品业务服务"""

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def get_trending(self, page: int = 1, limit: int = 8) -> TrendingPage:
        """热销榜：按评价数排序，每次实时计算"""
        offset = (page - 1) * limit

        total = await self.product_repo.count_listable()
        if total == 0:
            return TrendingPage(products=[], total=0, has_more=False, page=page)

        rows = await self.product_repo.get_trending(offset=offset, limit=limit)
        products = [
            self.product_repo.to_trending_model(product, review_count, average_rating)
            for product, review_count, average_rating in rows
        ]

        return TrendingPage(
            products=products,
            total=total,
            has_more=offset + len(products) < total,
            page=page
        )
