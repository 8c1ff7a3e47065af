"""
订单相关数据模型
"""

from decimal import Decimal
from typing import List, Optional
from enum import Enum

from pydantic import Field, field_validator

from storefront.models.common import CamelModel, Money, blank_to_none


class OrderStatus(str, Enum):
    """订单状态枚举"""
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"


# 不计入优惠券使用次数的订单状态
NON_COUNTING_STATUSES = (OrderStatus.CANCELLED.value, OrderStatus.RETURNED.value)


class PaymentMethod(str, Enum):
    """支付方式枚举"""
    COD = "COD"
    CARD = "Card"
    SAFEPAY = "Safepay"
    ONLINE = "Online Payment"


class OrderItem(CamelModel):
    """订单商品"""

    product_id: str = Field(..., alias="product_id")
    name: str
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image_url: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class ShippingAddress(CamelModel):
    """收货地址，必填项在服务层校验"""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def strip_blank(cls, v):
        return blank_to_none(v)

    @property
    def is_complete(self) -> bool:
        return all([self.full_name, self.address, self.city, self.phone])


class OrderCreate(CamelModel):
    """下单请求"""

    items: List[OrderItem] = Field(default_factory=list)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: PaymentMethod = PaymentMethod.COD
    shipping_cost: Money = Field(Decimal("0"), ge=0)
    coupon_code: Optional[str] = None

    @field_validator("coupon_code", mode="before")
    @classmethod
    def normalize_coupon_code(cls, v):
        v = blank_to_none(v)
        return v.upper() if v else v

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))


class OrderPlaced(CamelModel):
    """下单结果"""

    success: bool = True
    order_id: str
    message: str = "Order placed successfully"
