"""jxml 特定的异常类.

该模块为 jxml 库定义了异常层次结构.
"""

from typing import Any


class JxmlError(Exception):
    """所有 jxml 异常的基类."""

    pass


class ConvertError(JxmlError):
    """转换器在处理 JSON 令牌时失败.

    转换器的内部状态在抛出后不再一致, 实例不可继续使用.
    """

    def __init__(
        self,
        msg: str,
        token: Any = None,
        depth: int | None = None,
    ) -> None:
        """初始化转换错误.

        Args:
            msg: 错误描述信息.
            token: 触发错误的 JSON 令牌 (event, value).
            depth: 出错时帧栈的深度.
        """
        super().__init__(msg)
        self.token = token
        self.depth = depth

    def __str__(self) -> str:
        base_msg = super().__str__()
        parts = []
        if self.token is not None:
            parts.append(f"token={self.token!r}")
        if self.depth is not None:
            parts.append(f"depth={self.depth}")
        if parts:
            return f"{base_msg} ({', '.join(parts)})"
        return base_msg


class InvalidKeyError(ConvertError):
    """对象上下文中期望键的位置出现了非字符串令牌."""

    pass


class InvalidTokenError(ConvertError):
    """结束标记与最内层打开帧的类型不匹配.

    Case:
        - 在数组帧中出现 `end_map`.
        - 没有任何打开的数组时出现 `end_array`.
    """

    pass


class UnknownTokenError(ConvertError):
    """令牌不属于六种可识别的值类型之一."""

    pass


class ConverterStateError(ConvertError):
    """在已失败的转换器上继续拉取时抛出."""

    pass


class JsonSourceError(JxmlError, ValueError):
    """JSON 令牌源无法提供合法的令牌序列.

    Case:
        - 输入不是合法的 JSON (语法错误, 文档被截断).
        - 对象键之后没有紧跟一个值令牌.
    """

    pass


class XmlSinkError(JxmlError):
    """XML 写入器拒绝了一个令牌.

    Case:
        - 结束标签与最内层打开的开始标签名称不一致.
        - 元素名称为空.
    """

    pass
