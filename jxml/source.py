"""JSON令牌源.

该模块把 ijson 的 `basic_parse` 事件流包装为转换器使用的令牌源,
也可以直接包装任意 `(event, value)` 令牌序列.
"""

import io
from collections.abc import Iterable, Iterator
from typing import IO, Any

import ijson

from .exceptions import JsonSourceError
from .types import END_ARRAY, END_MAP, MAP_KEY, JsonToken

# 不能作为对象成员值的令牌
_NOT_A_VALUE = frozenset({END_MAP, END_ARRAY, MAP_KEY})


class JsonTokenSource:
    """只进的 JSON 令牌序列.

    Usage:
        >>> source = JsonTokenSource.from_text('{"a": 1}')
        >>> source.next_token()
        ('start_map', None)
    """

    __slots__ = ("_tokens", "tokens_read")

    def __init__(self, tokens: Iterable[JsonToken]):
        self._tokens: Iterator[JsonToken] = iter(tokens)
        self.tokens_read = 0

    @classmethod
    def from_file(cls, fp: IO[Any], use_float: bool = False) -> "JsonTokenSource":
        """从文件对象创建令牌源 (推荐二进制模式)."""
        return cls(ijson.basic_parse(fp, use_float=use_float))

    @classmethod
    def from_text(
        cls, document: str | bytes | bytearray, use_float: bool = False
    ) -> "JsonTokenSource":
        """从内存中的 JSON 文档创建令牌源."""
        if isinstance(document, str):
            document = document.encode("utf-8")
        return cls.from_file(io.BytesIO(bytes(document)), use_float=use_float)

    def next_token(self) -> JsonToken | None:
        """读取下一个令牌, 流结束时返回 None.

        Raises:
            JsonSourceError: 输入不是合法的 JSON.
        """
        try:
            token = next(self._tokens)
        except StopIteration:
            return None
        except ijson.JSONError as e:
            raise JsonSourceError(f"malformed JSON input: {e}") from e
        self.tokens_read += 1
        return token

    def next_member(self, key: str) -> tuple[str, JsonToken]:
        """读取对象键之后的值令牌, 作为一个原子的 (键, 值令牌) 对返回.

        Raises:
            JsonSourceError: 键之后没有值, 或紧跟的令牌不能作为值.
        """
        token = self.next_token()
        if token is None:
            raise JsonSourceError(f"object key {key!r} is not followed by a value")
        if isinstance(token, tuple) and token and token[0] in _NOT_A_VALUE:
            raise JsonSourceError(
                f"object key {key!r} is followed by {token[0]!r} instead of a value"
            )
        return key, token

    def __iter__(self) -> Iterator[JsonToken]:
        while (token := self.next_token()) is not None:
            yield token
