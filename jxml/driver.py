"""jxml驱动器.

把转换器的输出包裹在一个固定的根元素中, 并逐个转发给写入器.
"""

from .config import Config
from .converter import Converter
from .log import describe_token, logger
from .sink import XmlTokenSink
from .source import JsonTokenSource
from .types import EndElement, StartElement


def convert(
    source: JsonTokenSource,
    sink: XmlTokenSink,
    config: Config | None = None,
    suppress_log: bool = False,
) -> int:
    """把一个完整的 JSON 文档转换为一个完整的 XML 文档.

    任何转换或写入错误都会中止循环并原样抛出, 此时不会写入根元素的
    结束标签; 已经转发给写入器的令牌保持原样.

    Args:
        source: JSON 令牌源.
        sink: XML 令牌写入器.
        config: 转换配置.
        suppress_log: 是否禁止输出调试/错误日志.

    Returns:
        int: 转发的令牌数量 (包含根元素的开始和结束标签).
    """
    config = config if config is not None else Config()
    root = config.naming.root
    converter = Converter(source, config)
    count = 0
    last = None

    if not suppress_log:
        logger.debug("[convert] 开始转换, 根元素 <%s>", root)

    try:
        sink.encode_token(StartElement(root))
        count += 1
        while (token := converter.pull()) is not None:
            last = token
            sink.encode_token(token)
            count += 1
        sink.encode_token(EndElement(root))
        count += 1
    except Exception as e:
        if not suppress_log:
            logger.error(
                "[convert] 转换错误: %s (已输出 %d 个令牌, 最后一个为 %s)",
                e,
                count,
                describe_token(last) if last is not None else "无",
            )
        raise

    if not suppress_log:
        logger.debug(
            "[convert] 成功转换 %d 个 JSON 令牌为 %d 个 XML 令牌",
            source.tokens_read,
            count,
        )
    return count
