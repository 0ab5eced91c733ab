"""流式 JSON -> XML 转换器.

转换器按需从 JSON 令牌源拉取令牌, 每次拉取最多产生一个 XML 令牌,
全程不构建任何中间树. 元素命名由三个栈决定:

- 帧栈: 每个打开的输出元素一个条目 (值类型 + 打开时的名称).
- 待用键栈: 对象键在读入后、处理其值之前压入.
- 数组绑定栈: 作为对象字段值的数组在其生命周期内保留键名,
  数组容器和其直接元素都复用该名称.
"""

from collections.abc import Generator, Iterator

from .config import Config
from .exceptions import (
    ConverterStateError,
    InvalidKeyError,
    InvalidTokenError,
    JxmlError,
    UnknownTokenError,
)
from .log import describe_token, logger
from .source import JsonTokenSource
from .types import (
    END_ARRAY,
    END_MAP,
    MAP_KEY,
    SCALAR_EVENTS,
    START_ARRAY,
    START_MAP,
    CharData,
    EndElement,
    JsonToken,
    StartElement,
    ValueKind,
    XmlToken,
    format_scalar,
)


class Frame:
    """一个打开的输出元素."""

    __slots__ = ("emitted", "kind", "name")

    def __init__(self, kind: ValueKind, name: str, emitted: bool = True):
        self.kind = kind
        self.name = name  # 打开时选定的元素名
        self.emitted = emitted  # 容器标签被省略时为 False

    def __repr__(self) -> str:
        return f"Frame({self.kind.name}, {self.name!r})"


class Converter:
    """拉取式流转换器.

    每次调用 `pull()` 返回一个 XML 令牌, 输入耗尽时返回 None.
    也支持迭代器协议. 实例只对应一个文档, 抛出错误后不可复用.

    Usage:
        >>> conv = Converter(JsonTokenSource.from_text("[1]"))
        >>> list(conv)
        [StartElement(name='array'), StartElement(name='number'), ...]
    """

    __slots__ = (
        "_array_keys",
        "_config",
        "_failed",
        "_frames",
        "_keys",
        "_source",
        "_tail",
    )

    def __init__(self, source: JsonTokenSource, config: Config | None = None):
        self._source = source
        self._config = config if config is not None else Config()
        self._frames: list[Frame] = []
        self._keys: list[str] = []
        self._array_keys: list[str] = []
        # 标量的待输出文本和结束标签
        self._tail: Iterator[XmlToken] | None = None
        self._failed = False

    @property
    def depth(self) -> int:
        """当前帧栈深度 (不含根包装元素)."""
        return len(self._frames)

    def pull(self) -> XmlToken | None:
        """拉取下一个 XML 令牌.

        Returns:
            XML 令牌, 输入耗尽时返回 None.

        Raises:
            InvalidKeyError: 对象中期望键的位置不是字符串键.
            InvalidTokenError: 结束标记与最内层帧的类型不匹配.
            UnknownTokenError: 令牌无法识别.
            JsonSourceError: 令牌源无法提供合法输入.
            ConverterStateError: 转换器此前已失败.
        """
        if self._failed:
            raise ConverterStateError("converter cannot be reused after an error")
        try:
            return self._next()
        except JxmlError:
            self._failed = True
            raise

    def __iter__(self) -> Iterator[XmlToken]:
        return self

    def __next__(self) -> XmlToken:
        token = self.pull()
        if token is None:
            raise StopIteration
        return token

    def _next(self) -> XmlToken | None:
        while True:
            if self._tail is not None:
                token = next(self._tail, None)
                if token is not None:
                    return token
                self._tail = None

            raw = self._source.next_token()
            if raw is None:
                if self._frames:
                    logger.warning(
                        "[Converter] 输入在 %d 个未关闭的帧内结束",
                        len(self._frames),
                    )
                return None

            token = self._dispatch(raw)
            # 被省略的数组容器标签不产生输出, 继续读取
            if token is not None:
                return token

    def _dispatch(self, raw: JsonToken) -> XmlToken | None:
        if not isinstance(raw, tuple) or len(raw) != 2:
            raise UnknownTokenError("malformed token", token=raw, depth=self.depth)

        # 对象中先读键, 再读其值; field 表示当前值直接属于对象字段
        field = False
        if self._frames and self._frames[-1].kind is ValueKind.OBJECT:
            if raw[0] != END_MAP:
                field = True
                key = self._check_key(raw)
                key, raw = self._source.next_member(key)
                self._keys.append(key)

        event, value = raw
        if event == START_MAP:
            return self._open(ValueKind.OBJECT)

        if event == START_ARRAY:
            if self._keys:
                self._array_keys.append(self._keys[-1])
            # 只省略对象字段值本身的数组容器, 嵌套数组是元素值, 保留其标签
            skip = field and self._config.flatten_arrays
            return self._open(ValueKind.ARRAY, emitted=not skip)

        if event == END_MAP:
            if not self._frames or self._frames[-1].kind is not ValueKind.OBJECT:
                raise InvalidTokenError(
                    "end of object outside an object", token=raw, depth=self.depth
                )
            return self._close()

        if event == END_ARRAY:
            if not self._frames or self._frames[-1].kind is not ValueKind.ARRAY:
                raise InvalidTokenError(
                    "end of array outside an array", token=raw, depth=self.depth
                )
            if self._array_keys:
                self._array_keys.pop()
            return self._close()

        kind = SCALAR_EVENTS.get(event)
        if kind is None:
            raise UnknownTokenError(
                f"unknown token type {event!r}", token=raw, depth=self.depth
            )
        text = format_scalar(event, value)
        start = self._open(kind)
        self._tail = self._scalar_tail(text)
        return start

    def _check_key(self, raw: JsonToken) -> str:
        event, value = raw
        if event != MAP_KEY or not isinstance(value, str):
            raise InvalidKeyError(
                f"expected object key, got {describe_token(raw)}",
                token=raw,
                depth=self.depth,
            )
        return value

    def _scalar_tail(self, text: str) -> Generator[XmlToken, None, None]:
        yield CharData(text)
        end = self._close()
        if end is not None:
            yield end

    def _open(self, kind: ValueKind, emitted: bool = True) -> StartElement | None:
        name = self._resolve_name(kind)
        self._frames.append(Frame(kind, name, emitted))
        return StartElement(name) if emitted else None

    def _close(self) -> EndElement | None:
        frame = self._frames.pop()
        name = self._resolve_name(frame.kind)
        if self._config.retain_keys:
            name = frame.name
        return EndElement(name) if frame.emitted else None

    def _resolve_name(self, kind: ValueKind) -> str:
        # 打开和关闭使用同一规则, 但关闭时的栈状态可能与打开时不同
        if self._keys:
            key = self._keys[-1]
            if self._array_keys and key == self._array_keys[-1]:
                return key
            self._keys.pop()
            return key
        return self._config.naming.name_for(kind)
