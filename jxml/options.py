"""jxml转换的配置选项.

该模块定义了用于控制 `dumps`, `dump` 和 `Converter` 行为的选项标志.
"""

from enum import IntFlag


class ConvertOption(IntFlag):
    """转换选项标志.

    可以使用位运算组合多个选项:
        option = ConvertOption.RETAIN_KEYS | ConvertOption.FLATTEN_ARRAYS
    """

    # 默认行为: 键在首次命名开始标签时弹出, 非数组值的结束标签使用类型默认名
    NONE = 0x0000

    # 每个帧保留打开时选定的名称, 结束标签总是与开始标签一致
    RETAIN_KEYS = 0x0001

    # 省略作为对象字段值的数组的容器元素, 元素作为重复的兄弟节点输出
    # 嵌套在其中的数组仍保留各自的容器元素
    FLATTEN_ARRAYS = 0x0002

    # 非整数数字解码为 float 而不是 Decimal (丢失源文本中的数字)
    USE_FLOAT = 0x0004
