"""提供 jxml 测试的公共 Fixtures."""

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from jxml import Config, JsonTokenSource, TokenRecorder, convert


def object_tokens(
    *members: tuple[str, list[tuple[str, Any]]],
) -> list[tuple[str, Any]]:
    """构建对象的令牌序列, 每个成员为 (键, 值令牌列表)."""
    tokens: list[tuple[str, Any]] = [("start_map", None)]
    for key, value in members:
        tokens.append(("map_key", key))
        tokens.extend(value)
    tokens.append(("end_map", None))
    return tokens


def array_tokens(*items: list[tuple[str, Any]]) -> list[tuple[str, Any]]:
    """构建数组的令牌序列, 每个元素为一个值令牌列表."""
    tokens: list[tuple[str, Any]] = [("start_array", None)]
    for item in items:
        tokens.extend(item)
    tokens.append(("end_array", None))
    return tokens


@pytest.fixture
def render() -> Callable[..., str]:
    """提供把令牌序列经驱动器转换为紧凑标记文本的函数.

    Returns:
        接收令牌序列和可选 Config 的函数.
    """

    def _render(
        tokens: Iterable[tuple[str, Any]], config: Config | None = None
    ) -> str:
        recorder = TokenRecorder()
        convert(JsonTokenSource(tokens), recorder, config, suppress_log=True)
        return recorder.to_markup()

    return _render
