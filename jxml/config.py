"""jxml 配置对象."""

import re
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, field_validator

from .options import ConvertOption
from .types import ValueKind

_XML_NAME = re.compile(r"^[^\W\d][\w.\-:]*$")


class NamingScheme(BaseModel):
    """值类型到默认元素名的映射.

    当没有结构性键名可用时, 转换器按值的类型从这里取元素名.
    `root` 是驱动器添加的最外层包装元素名.

    Usage:
        ```python
        naming = NamingScheme(array="list", root="document")
        naming.name_for(ValueKind.ARRAY)  # "list"
        ```
    """

    model_config = ConfigDict(frozen=True)

    object: str = "object"
    array: str = "array"
    boolean: str = "boolean"
    number: str = "number"
    string: str = "string"
    null: str = "null"
    root: str = "root"

    @field_validator("*")
    @classmethod
    def _check_xml_name(cls, value: str) -> str:
        if not _XML_NAME.match(value):
            raise ValueError(f"not a valid XML element name: {value!r}")
        return value

    def name_for(self, kind: ValueKind) -> str:
        """获取指定值类型的默认元素名."""
        return getattr(self, kind.name.lower())


DEFAULT_NAMING = NamingScheme()


@dataclass(frozen=True)
class Config:
    """jxml 转换配置 (不可变).

    在 API 入口层创建, 然后传递给 Converter / Driver / XmlWriter.

    Attributes:
        flags: 转换选项标志 (IntFlag).
        naming: 默认元素名映射.
        indent: 每层缩进字符串, 空字符串表示不换行不缩进.
        xml_declaration: 是否输出 `<?xml ...?>` 声明.
        strict_tags: 写入器是否校验结束标签与开始标签一致.
    """

    flags: ConvertOption = ConvertOption.NONE
    naming: NamingScheme = field(default_factory=NamingScheme)
    indent: str = "  "
    xml_declaration: bool = False
    strict_tags: bool = True

    @classmethod
    def from_params(
        cls,
        option: ConvertOption = ConvertOption.NONE,
        naming: NamingScheme | None = None,
        indent: str | int = "  ",
        xml_declaration: bool = False,
        strict_tags: bool = True,
    ) -> "Config":
        """从参数构建配置对象.

        Args:
            option: ConvertOption 枚举.
            naming: 默认元素名映射, None 时使用内置名称.
            indent: 缩进字符串或空格数.
            xml_declaration: 是否输出 XML 声明.
            strict_tags: 是否校验结束标签名称.

        Returns:
            Config: 配置对象.
        """
        if isinstance(indent, int):
            if indent < 0:
                raise ValueError("indent must not be negative")
            indent = " " * indent

        return cls(
            flags=option,
            naming=naming if naming is not None else DEFAULT_NAMING,
            indent=indent,
            xml_declaration=xml_declaration,
            strict_tags=strict_tags,
        )

    @property
    def retain_keys(self) -> bool:
        """结束标签是否沿用开始标签的名称."""
        return bool(self.flags & ConvertOption.RETAIN_KEYS)

    @property
    def flatten_arrays(self) -> bool:
        """是否省略键绑定数组的容器元素."""
        return bool(self.flags & ConvertOption.FLATTEN_ARRAYS)

    @property
    def use_float(self) -> bool:
        """非整数数字是否解码为 float."""
        return bool(self.flags & ConvertOption.USE_FLOAT)
