"""jxml API模块.

提供用于 JSON -> XML 转换的高级接口 `dumps`, `dump`, `iter_tokens`.
高级接口默认使用 `ConvertOption.RETAIN_KEYS`, 保证输出的开始和结束标签一致;
需要原始命名规则时传入 `ConvertOption.NONE`.
"""

import io
from collections.abc import Generator
from typing import IO, Any

from .config import Config, NamingScheme
from .converter import Converter
from .driver import convert
from .options import ConvertOption
from .sink import XmlWriter
from .source import JsonTokenSource
from .types import EndElement, StartElement, XmlToken


def dumps(
    document: str | bytes | bytearray,
    option: ConvertOption = ConvertOption.RETAIN_KEYS,
    naming: NamingScheme | None = None,
    indent: str | int = "  ",
    xml_declaration: bool = False,
    strict_tags: bool = True,
) -> str:
    """把 JSON 文档转换为 XML 文本.

    Args:
        document: JSON 文本 (str 或 UTF-8 字节).
        option: 转换选项.
        naming: 默认元素名映射.
        indent: 缩进字符串或空格数, 空字符串表示紧凑输出.
        xml_declaration: 是否输出 XML 声明.
        strict_tags: 写入器是否校验结束标签名称.

    Returns:
        str: XML 文本.

    Raises:
        ConvertError: 令牌流结构错误.
        JsonSourceError: 输入不是合法的 JSON.
        XmlSinkError: 写入器拒绝了某个令牌.
    """
    config = Config.from_params(
        option=option,
        naming=naming,
        indent=indent,
        xml_declaration=xml_declaration,
        strict_tags=strict_tags,
    )
    source = JsonTokenSource.from_text(document, use_float=config.use_float)
    out = io.StringIO()
    _run(source, out, config)
    return out.getvalue()


def dump(
    fp: IO[Any],
    out: IO[Any],
    option: ConvertOption = ConvertOption.RETAIN_KEYS,
    naming: NamingScheme | None = None,
    indent: str | int = "  ",
    xml_declaration: bool = False,
    strict_tags: bool = True,
) -> int:
    """把 JSON 文件流式转换为 XML 并写入输出流.

    出错时已写入的部分输出会被刷新, 然后错误原样抛出.

    Args:
        fp: JSON 输入文件对象 (推荐二进制模式).
        out: XML 输出文件对象.
        option: 转换选项.
        naming: 默认元素名映射.
        indent: 缩进字符串或空格数.
        xml_declaration: 是否输出 XML 声明.
        strict_tags: 写入器是否校验结束标签名称.

    Returns:
        int: 写入的 XML 令牌数量.
    """
    config = Config.from_params(
        option=option,
        naming=naming,
        indent=indent,
        xml_declaration=xml_declaration,
        strict_tags=strict_tags,
    )
    source = JsonTokenSource.from_file(fp, use_float=config.use_float)
    return _run(source, out, config)


def iter_tokens(
    document: str | bytes | bytearray,
    option: ConvertOption = ConvertOption.RETAIN_KEYS,
    naming: NamingScheme | None = None,
) -> Generator[XmlToken, None, None]:
    """逐个产生 XML 令牌 (包含根元素)."""
    config = Config.from_params(option=option, naming=naming)
    source = JsonTokenSource.from_text(document, use_float=config.use_float)
    root = config.naming.root
    yield StartElement(root)
    yield from Converter(source, config)
    yield EndElement(root)


def _run(source: JsonTokenSource, out: IO[Any], config: Config) -> int:
    writer = XmlWriter(
        out,
        indent=config.indent,
        xml_declaration=config.xml_declaration,
        strict_tags=config.strict_tags,
    )
    with writer:
        return convert(source, writer, config)
