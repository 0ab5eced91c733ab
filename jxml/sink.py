"""XML令牌写入器.

该模块定义了驱动器转发令牌的目标接口, 以及基于
`xml.sax.saxutils.XMLGenerator` 的文本写入器. 转义和缩进由写入器负责.
"""

from typing import IO, Any, Protocol
from xml.sax.saxutils import XMLGenerator, escape

from .exceptions import XmlSinkError
from .types import CharData, EndElement, StartElement, XmlToken


class XmlTokenSink(Protocol):
    """按文档顺序接收 XML 令牌的对象."""

    def encode_token(self, token: XmlToken) -> None: ...


class XmlWriter:
    """把 XML 令牌序列化为文本.

    缩进规则: 每个开始标签另起一行并按深度缩进; 结束标签只有在元素
    包含子元素时才另起一行; 字符数据紧跟在开始标签之后.

    Usage:
        >>> with XmlWriter(sys.stdout) as writer:
        ...     writer.encode_token(StartElement("root"))
        ...     writer.encode_token(EndElement("root"))
    """

    def __init__(
        self,
        out: IO[Any],
        indent: str = "  ",
        xml_declaration: bool = False,
        strict_tags: bool = True,
        short_empty_elements: bool = False,
        encoding: str = "utf-8",
    ):
        """初始化写入器.

        Args:
            out: 文本或二进制输出流.
            indent: 每层缩进字符串, 空字符串表示紧凑输出.
            xml_declaration: 是否先输出 XML 声明.
            strict_tags: 结束标签名必须与最内层开始标签一致.
            short_empty_elements: 空元素是否写成 `<a/>`.
            encoding: 声明中的编码, 以及二进制输出流的编码.
        """
        self._gen = XMLGenerator(
            out, encoding=encoding, short_empty_elements=short_empty_elements
        )
        self._indent = indent
        self._strict = strict_tags
        self._open: list[str] = []
        self._depth = 0
        self._indented_in = False
        self._put_newline = False
        self.tokens_written = 0
        if xml_declaration:
            self._gen.startDocument()

    def encode_token(self, token: XmlToken) -> None:
        """写入一个令牌.

        Raises:
            XmlSinkError: 元素名为空, 或严格模式下结束标签不匹配.
        """
        if isinstance(token, StartElement):
            if not token.name:
                raise XmlSinkError("start tag with no name")
            self._write_indent(1)
            self._gen.startElement(token.name, {})
            self._open.append(token.name)
        elif isinstance(token, EndElement):
            self._check_end(token.name)
            self._write_indent(-1)
            self._gen.endElement(token.name)
        elif isinstance(token, CharData):
            self._gen.characters(token.text)
        else:
            raise XmlSinkError(f"unsupported token {token!r}")
        self.tokens_written += 1

    def close(self) -> None:
        """刷新底层输出流."""
        self._gen.endDocument()

    def __enter__(self) -> "XmlWriter":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _check_end(self, name: str) -> None:
        if not name:
            raise XmlSinkError("end tag with no name")
        if not self._open:
            if self._strict:
                raise XmlSinkError(f"unexpected end tag </{name}>")
            return
        start = self._open.pop()
        if self._strict and start != name:
            raise XmlSinkError(f"end tag </{name}> does not match start tag <{start}>")

    def _write_indent(self, delta: int) -> None:
        if not self._indent:
            return
        if delta < 0:
            self._depth -= 1
            if self._indented_in:
                # 元素内只有字符数据 (或为空), 结束标签不换行
                self._indented_in = False
                return
            self._indented_in = False
        if self._put_newline:
            self._gen.ignorableWhitespace("\n")
        else:
            self._put_newline = True
        if self._depth > 0:
            self._gen.ignorableWhitespace(self._indent * self._depth)
        if delta > 0:
            self._depth += 1
            self._indented_in = True


class TokenRecorder:
    """把令牌收集到列表中的写入器, 不做任何校验."""

    def __init__(self) -> None:
        self.tokens: list[XmlToken] = []

    def encode_token(self, token: XmlToken) -> None:
        self.tokens.append(token)

    def to_markup(self) -> str:
        """把收集的令牌渲染为紧凑的标记文本."""
        parts = []
        for token in self.tokens:
            if isinstance(token, StartElement):
                parts.append(f"<{token.name}>")
            elif isinstance(token, EndElement):
                parts.append(f"</{token.name}>")
            else:
                parts.append(escape(token.text))
        return "".join(parts)
