"""jxml命令行工具."""

import io
import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, cast

import click
from rich.console import Console
from rich.syntax import Syntax

from .config import Config, NamingScheme
from .driver import convert
from .exceptions import JxmlError
from .log import logger
from .options import ConvertOption
from .sink import XmlWriter
from .source import JsonTokenSource

# 内置示例文档 (--sample)
SAMPLE_DOCUMENT = """{
  "name": "jxml",
  "version": 1.5,
  "stable": false,
  "license": null,
  "tags": ["json", "xml", "streaming"],
  "maintainers": [
    {"login": "alice", "commits": 120},
    {"login": "bob", "commits": 7}
  ],
  "matrix": [[1, 2], [3]]
}
"""


def _build_config(
    naming: str,
    flatten_arrays: bool,
    use_float: bool,
    root_name: str,
    indent: int,
    declaration: bool,
    lenient: bool,
) -> Config:
    """根据命令行参数构建转换配置."""
    option = ConvertOption.NONE
    if naming == "retain":
        option |= ConvertOption.RETAIN_KEYS
    if flatten_arrays:
        option |= ConvertOption.FLATTEN_ARRAYS
    if use_float:
        option |= ConvertOption.USE_FLOAT

    try:
        scheme = NamingScheme(root=root_name)
    except ValueError as e:
        raise click.BadParameter(
            f"无效的根元素名 {root_name!r}", param_hint="--root"
        ) from e

    return Config.from_params(
        option=option,
        naming=scheme,
        indent=indent,
        xml_declaration=declaration,
        strict_tags=not lenient,
    )


def _convert_to(
    source_fp: IO[bytes], out: IO[Any], config: Config, verbose: bool
) -> None:
    """把输入流转换后写入 out, 出错时仍刷新已写入的部分."""
    source = JsonTokenSource.from_file(source_fp, use_float=config.use_float)
    writer = XmlWriter(
        out,
        indent=config.indent,
        xml_declaration=config.xml_declaration,
        strict_tags=config.strict_tags,
    )
    with writer:
        count = convert(source, writer, config, suppress_log=not verbose)
    if verbose:
        click.echo(f"[DEBUG] 输出 {count} 个 XML 令牌", err=True)


@contextmanager
def _debug_logging(enabled: bool) -> Generator[None, None, None]:
    """在命令执行期间把 jxml 日志输出到 stderr."""
    if not enabled:
        yield
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


def _print_xml(text: str) -> None:
    """输出 XML 文本, 终端中使用 Rich 高亮."""
    if not text:
        return
    if click.get_text_stream("stdout").isatty():
        Console().print(Syntax(text, "xml", theme="monokai", word_wrap=True))
    else:
        click.echo(text)


@click.command(help="JSON -> XML 流式转换命令行工具")
@click.argument("document", required=False)
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="从文件读取 JSON 文档",
)
@click.option("--sample", is_flag=True, help="转换内置的示例文档")
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="将输出保存到文件 (如不指定则输出到控制台)",
)
@click.option(
    "--naming",
    type=click.Choice(["compat", "retain"]),
    default="retain",
    show_default=True,
    help="命名策略: retain 结束标签沿用开始标签名, compat 使用原始的弹出规则",
)
@click.option("--flatten-arrays", is_flag=True, help="省略键绑定数组的容器元素")
@click.option("--use-float", is_flag=True, help="非整数数字按 float 解码")
@click.option(
    "--root", "root_name", default="root", show_default=True, help="根元素名"
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="缩进空格数, 0 表示紧凑输出",
)
@click.option("--declaration", is_flag=True, help="输出 XML 声明")
@click.option("--lenient", is_flag=True, help="不校验结束标签与开始标签是否一致")
@click.option("-v", "--verbose", is_flag=True, help="显示详细的转换过程信息")
def cli(
    document: str | None,
    file_path: Path | None,
    sample: bool,
    output_file: Path | None,
    naming: str,
    flatten_arrays: bool,
    use_float: bool,
    root_name: str,
    indent: int,
    declaration: bool,
    lenient: bool,
    verbose: bool,
) -> None:
    """JSON -> XML 流式转换命令行工具.

    Examples:
      # 直接转换命令行参数中的 JSON
      jxml '{"tags": ["a", "b"]}'

      # 从文件读取并保存结果
      jxml -f input.json -o output.xml

      # 转换内置示例, 使用原始命名规则
      jxml --sample --naming compat --lenient
    """
    # 互斥参数检查
    given = sum([document is not None, file_path is not None, sample])
    if given > 1:
        raise click.UsageError("DOCUMENT, --file 和 --sample 只能指定一个")
    if given == 0:
        raise click.UsageError("必须指定 DOCUMENT, --file 或 --sample")

    config = _build_config(
        naming, flatten_arrays, use_float, root_name, indent, declaration, lenient
    )

    if file_path is not None:
        source_fp: IO[bytes] = open(file_path, "rb")
        if verbose:
            click.echo(f"[DEBUG] 从文件读取: {file_path}", err=True)
    elif sample:
        source_fp = io.BytesIO(SAMPLE_DOCUMENT.encode("utf-8"))
    else:
        source_fp = io.BytesIO(cast(str, document).encode("utf-8"))

    error: JxmlError | None = None
    with source_fp, _debug_logging(verbose):
        if output_file is not None:
            with open(output_file, "w", encoding="utf-8") as out:
                try:
                    _convert_to(source_fp, out, config, verbose)
                except JxmlError as e:
                    error = e
            if error is None:
                click.echo(f"结果已保存到: {output_file}", err=True)
        else:
            buffer = io.StringIO()
            try:
                _convert_to(source_fp, buffer, config, verbose)
            except JxmlError as e:
                error = e
            # 失败时也输出已经生成的部分
            _print_xml(buffer.getvalue())

    if error is not None:
        if verbose:
            import traceback

            traceback.print_exception(error, file=sys.stderr)
        raise click.ClickException(f"转换失败: {error}")


def main() -> None:
    """入口函数."""
    cli()


if __name__ == "__main__":
    main()
