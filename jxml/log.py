"""jxml日志记录器."""

import logging
from typing import Any

from .types import CharData, EndElement, StartElement

logger = logging.getLogger("jxml")


def describe_token(token: Any, limit: int = 32) -> str:
    """获取令牌的简短文本描述, 用于日志和错误上下文.

    JSON 令牌为 `(event, value)` 元组, XML 令牌为 types 模块中的数据类.
    过长的文本会被截断到 `limit` 个字符.
    """
    if isinstance(token, StartElement):
        return f"<{token.name}>"
    if isinstance(token, EndElement):
        return f"</{token.name}>"
    if isinstance(token, CharData):
        return f"text {_shorten(token.text, limit)!r}"
    if isinstance(token, tuple) and len(token) == 2:
        event, value = token
        if value is None:
            return str(event)
        return f"{event} {_shorten(str(value), limit)!r}"
    return repr(token)


def _shorten(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: max(0, limit - 3)] + "..."
