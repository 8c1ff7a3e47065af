"""
订单相关数据库模型
"""

from datetime import datetime

from sqlalchemy import Column, String, Numeric, Boolean, DateTime, JSON
from storefront.core.database import Base


class OrderDB(Base):
    """订单数据库表"""

    __tablename__ = "orders"

    # 主键和用户信息
    id = Column(String(50), primary_key=True, comment="订单ID")
    user_id = Column(String(50), index=True, comment="用户ID（游客为空）")

    # 商品快照
    items = Column(JSON, nullable=False, comment="订单商品快照")

    # 金额信息
    subtotal = Column(Numeric(12, 2), nullable=False, default=0, comment="商品小计")
    shipping_cost = Column(Numeric(12, 2), default=0, comment="运费")
    discount = Column(Numeric(12, 2), default=0, comment="优惠券折扣")
    total_amount = Column(Numeric(12, 2), nullable=False, comment="实付金额")
    coupon_code = Column(String(50), index=True, comment="使用的优惠券代码")

    # 收货信息
    shipping_address = Column(JSON, nullable=False, comment="收货地址")

    # 订单状态
    payment_method = Column(String(50), default="COD", comment="支付方式")
    status = Column(String(20), nullable=False, default="Pending", index=True, comment="订单状态")
    is_paid = Column(Boolean, nullable=False, default=False, comment="是否已支付")
    paid_at = Column(DateTime, comment="支付时间")

    # 时间戳
    created_at = Column(DateTime, default=datetime.now, index=True, comment="创建时间")
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, comment="更新时间")

    __table_args__ = (
        {'comment': '订单主表'}
    )
