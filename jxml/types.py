"""jxml数据类型模块.

本模块定义了转换过程中流动的所有令牌类型:
输入侧的 JSON 令牌 (沿用 ijson `basic_parse` 的事件名),
输出侧的 XML 令牌, 以及用于默认元素命名的值类型枚举.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Any, TypeAlias

from .exceptions import UnknownTokenError

# JSON 令牌事件名 (与 ijson.basic_parse 一致)
START_MAP = "start_map"
MAP_KEY = "map_key"
END_MAP = "end_map"
START_ARRAY = "start_array"
END_ARRAY = "end_array"
BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"
NULL = "null"
# 部分 ijson 后端会细分数字事件
INTEGER = "integer"
DOUBLE = "double"

JsonToken: TypeAlias = tuple[str, Any]


class ValueKind(IntEnum):
    """JSON 值的种类.

    仅用于在没有结构性键名可用时选择默认元素名.
    """

    OBJECT = 0
    ARRAY = 1
    BOOLEAN = 2
    NUMBER = 3
    STRING = 4
    NULL = 5


SCALAR_EVENTS: dict[str, ValueKind] = {
    BOOLEAN: ValueKind.BOOLEAN,
    NUMBER: ValueKind.NUMBER,
    INTEGER: ValueKind.NUMBER,
    DOUBLE: ValueKind.NUMBER,
    STRING: ValueKind.STRING,
    NULL: ValueKind.NULL,
}


@dataclass(frozen=True, slots=True)
class StartElement:
    """XML 开始标签."""

    name: str


@dataclass(frozen=True, slots=True)
class EndElement:
    """XML 结束标签."""

    name: str


@dataclass(frozen=True, slots=True)
class CharData:
    """XML 字符数据 (未转义)."""

    text: str


XmlToken: TypeAlias = StartElement | EndElement | CharData


# 定点记法最多展开的数量级, 超出时保留科学记数法
MAX_FIXED_EXPONENT = 64


def _format_decimal(value: Decimal) -> str:
    if abs(value.adjusted()) > MAX_FIXED_EXPONENT:
        return str(value)
    return format(value, "f")


def format_number(value: Any) -> str:
    """将数字格式化为精确的十进制表示.

    - int: 原样输出. ijson 将 `-0` 解码为整数 0, 符号在此之前已经丢失,
      因此 `-0` 输出为 `0`; `-0.0` 保留符号.
    - Decimal: 保留源文本中的数字 (`1.50` 仍为 `1.50`), 指数展开 (`1E+3` -> `1000`).
    - float: 使用最短往返表示 (`1.0` -> `1`, `1e21` -> `1000000000000000000000`).

    数量级超过 `MAX_FIXED_EXPONENT` 的数字不展开, 使用科学记数法
    (`1e5000000` -> `1E+5000000`), 输出长度与输入同阶.

    Raises:
        UnknownTokenError: 值不是有限数字.
    """
    if isinstance(value, bool):
        raise UnknownTokenError("boolean value in number token", token=(NUMBER, value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnknownTokenError("non-finite number", token=(NUMBER, value))
        return _format_decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnknownTokenError("non-finite number", token=(NUMBER, value))
        return _format_decimal(Decimal(repr(value)).normalize())
    raise UnknownTokenError(
        f"unsupported number type {type(value).__name__}", token=(NUMBER, value)
    )


def format_scalar(event: str, value: Any) -> str:
    """将标量令牌渲染为字符数据文本.

    布尔值为 `true`/`false`, 字符串原样保留 (转义由写入器负责), null 为空文本.

    Raises:
        UnknownTokenError: 事件或值的类型无法识别.
    """
    kind = SCALAR_EVENTS.get(event)
    if kind is ValueKind.BOOLEAN:
        if not isinstance(value, bool):
            raise UnknownTokenError("non-boolean value", token=(event, value))
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.STRING:
        if not isinstance(value, str):
            raise UnknownTokenError("non-string value", token=(event, value))
        return value
    if kind is ValueKind.NULL:
        return ""
    raise UnknownTokenError(f"unknown token type {event!r}", token=(event, value))
