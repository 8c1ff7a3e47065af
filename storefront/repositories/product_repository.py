"""
商品数据库操作层
"""

from typing import List, Tuple

from sqlalchemy import select, and_, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import TrendingProduct
from storefront.models.database.product_db import ProductDB, ReviewDB


class ProductRepository:
    """商品数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _listable_condition():
        """上架且未归档（归档字段为空视为未归档）"""
        return and_(
            ProductDB.is_active == True,  # noqa: E712
            or_(ProductDB.is_archived == False, ProductDB.is_archived.is_(None))  # noqa: E712
        )

    async def count_listable(self) -> int:
        result = await self.db.execute(
            select(func.count(ProductDB.id)).where(self._listable_condition())
        )
        return result.scalar() or 0

    async def get_trending(self, offset: int, limit: int) -> List[Tuple[ProductDB, int, float]]:
        """按评价数倒序、商品ID正序排列的一页商品，附带评价数和平均分"""
        review_stats = select(
            ReviewDB.product_id.label("product_id"),
            func.count(ReviewDB.id).label("review_count"),
            func.avg(ReviewDB.rating).label("average_rating")
        ).group_by(ReviewDB.product_id).subquery()

        review_count = func.coalesce(review_stats.c.review_count, 0)
        average_rating = func.coalesce(review_stats.c.average_rating, 0)

        query = select(
            ProductDB,
            review_count.label("review_count"),
            average_rating.label("average_rating")
        ).outerjoin(
            review_stats, review_stats.c.product_id == ProductDB.id
        ).where(
            self._listable_condition()
        ).order_by(
            review_count.desc(), ProductDB.id.asc()
        ).offset(offset).limit(limit)

        result = await self.db.execute(query)
        return [
            (row[0], int(row.review_count or 0), float(row.average_rating or 0))
            for row in result.all()
        ]

    def to_trending_model(self, product: ProductDB, review_count: int, average_rating: float) -> TrendingProduct:
        """转换为热销榜投影"""
        return TrendingProduct(
            id=product.id,
            name=product.name,
            price=product.price,
            compare_at_price=product.compare_at_price,
            image_url=product.image_url,
            images=product.images or [],
            slug=product.slug,
            category=product.category_id,
            sub_category=product.sub_category,
            stock=product.stock or 0,
            review_count=review_count,
            average_rating=average_rating
        )
