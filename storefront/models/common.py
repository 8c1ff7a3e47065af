"""
通用模型工具
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


# 金额字段：内部使用Decimal计算，JSON输出为数字
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """前端约定使用驼峰字段名，同时接受下划线写法"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def to_naive_local(value: Optional[datetime]) -> Optional[datetime]:
    """带时区的时间统一转换为本地无时区时间，与数据库存储保持一致"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def blank_to_none(value):
    """空字符串视为未提供"""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def format_amount(amount) -> str:
    """金额展示：整数不带小数位（1000），否则去掉末尾的0（12.5）"""
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return format(value.normalize(), "f")
