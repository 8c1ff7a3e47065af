"""
商品与评价数据库模型
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Numeric, Text, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from storefront.core.database import Base


class ProductDB(Base):
    """商品表"""

    __tablename__ = "products"

    id = Column(String(50), primary_key=True, comment="商品ID")
    name = Column(String(100), nullable=False, comment="商品名称")
    slug = Column(String(150), unique=True, index=True, comment="URL别名")
    description = Column(Text, comment="商品描述")

    # 价格与库存
    price = Column(Numeric(12, 2), nullable=False, comment="售价")
    compare_at_price = Column(Numeric(12, 2), default=0, comment="划线价")
    stock = Column(Integer, nullable=False, default=0, comment="库存")

    # 分类
    category_id = Column(String(50), index=True, comment="分类ID")
    sub_category = Column(String(100), index=True, comment="子分类名称")

    # 图片
    image_url = Column(String(500), comment="主图")
    images = Column(JSON, default=list, comment="图片列表")

    is_active = Column(Boolean, nullable=False, default=True, index=True, comment="是否上架")
    is_archived = Column(Boolean, default=False, comment="是否归档")

    created_at = Column(DateTime, default=datetime.now, comment="创建时间")
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, comment="更新时间")

    reviews = relationship("ReviewDB", back_populates="product", cascade="all, delete-orphan")

    __table_args__ = (
        {'comment': '商品表'}
    )


class ReviewDB(Base):
    """商品评价表"""

    __tablename__ = "reviews"

    id = Column(String(50), primary_key=True, comment="评价ID")
    product_id = Column(String(50), ForeignKey("products.id"), nullable=False, index=True, comment="商品ID")
    user_id = Column(String(50), index=True, comment="用户ID（游客为空）")

    name = Column(String(100), nullable=False, comment="评价人")
    rating = Column(Integer, nullable=False, comment="评分 1-5")
    title = Column(String(100), nullable=False, comment="标题")
    body = Column(Text, nullable=False, comment="正文")
    verified = Column(Boolean, default=False, comment="是否认证买家")

    created_at = Column(DateTime, default=datetime.now, index=True, comment="评价时间")

    product = relationship("ProductDB", back_populates="reviews")

    __table_args__ = (
        {'comment': '商品评价表'}
    )
