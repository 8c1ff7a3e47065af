"""
优惠券相关数据模型
"""

from decimal import Decimal
from datetime import datetime
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.models.common import CamelModel, Money, to_naive_local, blank_to_none


class DiscountType(str, Enum):
    """折扣类型枚举"""
    PERCENTAGE = "percentage"  # 按小计百分比
    FIXED = "fixed"  # 固定金额


class Coupon(CamelModel):
    """优惠券模型"""

    id: str
    code: str
    discount_type: DiscountType
    discount_value: Money
    min_purchase_amount: Money = Decimal("0")
    start_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    usage_limit: Optional[int] = None
    used_count: int = 0
    max_uses_per_user: Optional[int] = 1
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def calculate_discount(self, cart_total: Decimal) -> Decimal:
        """计算折扣金额，不超过购物车总额"""
        if self.discount_type == DiscountType.PERCENTAGE:
            discount = cart_total * self.discount_value / Decimal("100")
        else:
            discount = self.discount_value

        return min(discount, cart_total)


class _CouponFields(CamelModel):

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("code", check_fields=False)
    @classmethod
    def normalize_code(cls, v):
        v = blank_to_none(v)
        return v.upper() if v else v

    @field_validator("start_date", "expiry_date", check_fields=False)
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_local(v)


class CouponCreate(_CouponFields):
    """创建优惠券请求，必填项在服务层校验以返回统一提示"""

    code: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Money] = Field(None, ge=0)
    min_purchase_amount: Money = Field(Decimal("0"), ge=0)
    start_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    usage_limit: Optional[int] = Field(None, ge=1)
    max_uses_per_user: Optional[int] = Field(1, ge=1)
    is_active: bool = True


class CouponUpdate(_CouponFields):
    """更新优惠券请求（部分更新）"""

    code: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Money] = Field(None, ge=0)
    min_purchase_amount: Optional[Money] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    usage_limit: Optional[int] = Field(None, ge=1)
    max_uses_per_user: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class CouponValidationRequest(CamelModel):
    """优惠券校验请求"""

    code: Optional[str] = None
    cart_total: Money = Field(Decimal("0"), ge=0)


class CouponValidation(BaseModel):
    """优惠券校验结果（服务层内部使用）"""

    is_valid: bool = Field(..., description="是否可用")
    message: str = Field(..., description="提示信息")
    status_code: int = Field(200, description="对应的HTTP状态码")
    coupon: Optional[Coupon] = Field(None, description="优惠券信息")
    discount_amount: Decimal = Field(Decimal("0"), description="折扣金额")
    min_purchase_required: Optional[Decimal] = Field(None, description="所需最低消费")


class CouponValidationResponse(CamelModel):
    """优惠券校验接口响应"""

    valid: bool
    message: str
    discount_amount: Optional[Money] = None
    discount_type: Optional[DiscountType] = None
    code: Optional[str] = None

    @classmethod
    def from_validation(cls, validation: CouponValidation) -> "CouponValidationResponse":
        if not validation.is_valid:
            return cls(valid=False, message=validation.message)

        return cls(
            valid=True,
            message=validation.message,
            discount_amount=validation.discount_amount,
            discount_type=validation.coupon.discount_type,
            code=validation.coupon.code
        )
