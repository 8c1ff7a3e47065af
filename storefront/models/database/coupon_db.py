"""
优惠券数据库模型
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime
from storefront.core.database import Base


class CouponDB(Base):
    """优惠券数据库表"""

    __tablename__ = "coupons"

    # 主键和基本信息
    id = Column(String(50), primary_key=True, comment="优惠券ID")
    code = Column(String(50), nullable=False, unique=True, index=True, comment="优惠券代码(大写)")
    discount_type = Column(String(20), nullable=False, comment="折扣类型 percentage/fixed")

    # 折扣信息
    discount_value = Column(Numeric(12, 2), nullable=False, comment="折扣值")
    min_purchase_amount = Column(Numeric(12, 2), default=0, comment="最低消费金额")

    # 有效期
    start_date = Column(DateTime, comment="生效时间")
    expiry_date = Column(DateTime, index=True, comment="过期时间")

    # 使用限制
    usage_limit = Column(Integer, comment="总使用次数限制")
    used_count = Column(Integer, nullable=False, default=0, comment="已使用次数")
    max_uses_per_user = Column(Integer, default=1, comment="单用户使用次数限制")

    is_active = Column(Boolean, nullable=False, default=True, index=True, comment="是否启用")

    # 时间戳
    created_at = Column(DateTime, default=datetime.now, index=True, comment="创建时间")
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, comment="更新时间")

    __table_args__ = (
        {'comment': '优惠券信息表'}
    )
