"""
弃单（未完成结账）数据库模型
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime, JSON
from storefront.core.database import Base


class AbandonedCheckoutDB(Base):
    """弃单记录表，按联系方式唯一"""

    __tablename__ = "abandoned_checkouts"

    id = Column(String(50), primary_key=True, comment="弃单ID")

    # 联系方式，至少有一项
    email = Column(String(255), unique=True, index=True, comment="邮箱")
    phone = Column(String(50), index=True, comment="手机号")
    name = Column(String(200), comment="姓名")

    # 购物车快照
    cart_items = Column(JSON, nullable=False, default=list, comment="购物车商品快照")
    total_amount = Column(Numeric(12, 2), default=0, comment="购物车总金额")

    # 挽回状态
    recovered = Column(Boolean, nullable=False, default=False, index=True, comment="是否已下单")
    recovery_sent_at = Column(DateTime, comment="挽回邮件发送时间")
    recovery_count = Column(Integer, nullable=False, default=0, comment="挽回通知次数")
    clicked_at = Column(DateTime, comment="首次点击挽回链接时间")

    # 时间戳
    created_at = Column(DateTime, default=datetime.now, comment="创建时间")
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, index=True, comment="更新时间")

    __table_args__ = (
        {'comment': '弃单记录表'}
    )
