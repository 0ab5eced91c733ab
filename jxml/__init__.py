"""流式 JSON -> XML 转换库.

以单次遍历把 JSON 令牌流转换为 XML 令牌流, 不构建任何中间树.
提供了 Converter (拉取式转换器), convert (驱动器) 以及 dumps/dump 高级接口.
"""

from .api import dump, dumps, iter_tokens
from .config import Config, NamingScheme
from .converter import Converter
from .driver import convert
from .exceptions import (
    ConvertError,
    ConverterStateError,
    InvalidKeyError,
    InvalidTokenError,
    JsonSourceError,
    JxmlError,
    UnknownTokenError,
    XmlSinkError,
)
from .options import ConvertOption
from .sink import TokenRecorder, XmlTokenSink, XmlWriter
from .source import JsonTokenSource
from .types import CharData, EndElement, StartElement, ValueKind, XmlToken

__version__ = "0.1.0"

__all__ = [
    "CharData",
    "Config",
    "ConvertError",
    "ConvertOption",
    "Converter",
    "ConverterStateError",
    "EndElement",
    "InvalidKeyError",
    "InvalidTokenError",
    "JsonSourceError",
    "JsonTokenSource",
    "JxmlError",
    "NamingScheme",
    "StartElement",
    "TokenRecorder",
    "UnknownTokenError",
    "ValueKind",
    "XmlSinkError",
    "XmlToken",
    "XmlTokenSink",
    "XmlWriter",
    "__version__",
    "convert",
    "dump",
    "dumps",
    "iter_tokens",
]
