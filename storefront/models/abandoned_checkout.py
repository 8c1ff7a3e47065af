"""
弃单相关数据模型
"""

from decimal import Decimal
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from storefront.models.common import CamelModel, Money, blank_to_none


class CartItem(CamelModel):
    """购物车商品快照"""

    product_id: Optional[str] = Field(None, alias="product_id")
    name: Optional[str] = None
    price: Money = Decimal("0")
    quantity: int = Field(1, ge=1)
    image_url: Optional[str] = None


class CheckoutCaptureRequest(CamelModel):
    """结账页购物车采集请求"""

    email: Optional[str] = None
    phone: Optional[str] = None
    name: Optional[str] = None
    cart_items: Optional[List[CartItem]] = None
    total_amount: Optional[Money] = None

    @field_validator("email", "phone", "name", mode="before")
    @classmethod
    def strip_blank(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v

    @property
    def has_contact(self) -> bool:
        return bool(self.email or self.phone)


class AbandonedCheckout(CamelModel):
    """弃单完整信息"""

    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    name: Optional[str] = None
    cart_items: List[CartItem] = Field(default_factory=list)
    total_amount: Money = Decimal("0")
    recovered: bool = False
    recovery_sent_at: Optional[datetime] = None
    recovery_count: int = 0
    clicked_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecoveredCart(CamelModel):
    """挽回链接返回的购物车快照"""

    id: str
    cart_items: List[CartItem] = Field(default_factory=list)
    total_amount: Money = Decimal("0")
    clicked_at: Optional[datetime] = None


class RecoveryEmailRequest(CamelModel):
    """后台手动发送挽回邮件请求"""

    cart_id: Optional[str] = None


class SweepItemResult(CamelModel):
    """单个弃单的处理结果"""

    id: str
    status: str
    error: Optional[str] = None


class SweepResult(CamelModel):
    """定时挽回任务汇总"""

    success: bool = True
    processed: int = 0
    sent: int = 0
    results: List[SweepItemResult] = Field(default_factory=list)
