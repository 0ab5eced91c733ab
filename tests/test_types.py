"""测试 jxml 类型模块."""

from decimal import Decimal

import pytest

from jxml import UnknownTokenError, ValueKind
from jxml.types import CharData, StartElement, format_number, format_scalar

SCALAR_CASES = [
    ("boolean", True, "true"),
    ("boolean", False, "false"),
    ("number", 42, "42"),
    ("number", -7, "-7"),
    ("number", 10**30, "1" + "0" * 30),
    ("number", Decimal("1.50"), "1.50"),
    ("number", Decimal("1E+3"), "1000"),
    ("number", Decimal("1.5E-7"), "0.00000015"),
    ("number", 1.0, "1"),
    ("number", 100.0, "100"),
    ("number", 0.1, "0.1"),
    ("number", 1e21, "1000000000000000000000"),
    ("integer", 5, "5"),
    ("double", 2.5, "2.5"),
    ("string", "a<b & c", "a<b & c"),
    ("string", "", ""),
    ("null", None, ""),
]


@pytest.mark.parametrize(
    ("event", "value", "expected"),
    SCALAR_CASES,
    ids=[f"{c[0]}-{c[2] or 'empty'}"[:40] for c in SCALAR_CASES],
)
def test_format_scalar(event: str, value: object, expected: str) -> None:
    """format_scalar() 应按类型渲染标量文本."""
    assert format_scalar(event, value) == expected


@pytest.mark.parametrize(
    ("event", "value"),
    [
        ("number", float("nan")),
        ("number", Decimal("Infinity")),
        ("number", True),
        ("number", "12"),
        ("boolean", 1),
        ("string", b"bytes"),
        ("start_map", None),
    ],
    ids=[
        "nan",
        "decimal_inf",
        "bool_number",
        "str_number",
        "int_bool",
        "bytes",
        "container",
    ],
)
def test_format_scalar_rejects(event: str, value: object) -> None:
    """无法渲染的值应抛出 UnknownTokenError."""
    with pytest.raises(UnknownTokenError):
        format_scalar(event, value)


def test_value_kind_order() -> None:
    """ValueKind 的顺序与默认名表一致."""
    assert [k.name for k in ValueKind] == [
        "OBJECT",
        "ARRAY",
        "BOOLEAN",
        "NUMBER",
        "STRING",
        "NULL",
    ]


def test_xml_tokens_are_immutable() -> None:
    """XML 令牌是不可变的值对象."""
    token = StartElement("a")

    assert token == StartElement("a")
    assert hash(token) == hash(StartElement("a"))
    with pytest.raises(AttributeError):
        token.name = "b"  # type: ignore[misc]
    assert CharData("x") != StartElement("x")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("1E+5000000"), "1E+5000000"),
        (Decimal("-2.5E-100"), "-2.5E-100"),
        (Decimal("0E+999999"), "0E+999999"),
        (1e300, "1E+300"),
        (Decimal("1E+64"), "1" + "0" * 64),
    ],
    ids=["huge_exponent", "tiny_exponent", "zero_exponent", "float", "limit"],
)
def test_format_number_large_magnitude(value: object, expected: str) -> None:
    """数量级过大或过小的数字保留科学记数法, 不展开为定点记法."""
    assert format_number(value) == expected


def test_format_number_negative_zero() -> None:
    """整数 0 没有符号; Decimal 和 float 的负零保留符号."""
    assert format_number(0) == "0"
    assert format_number(Decimal("-0.0")) == "-0.0"
    assert format_number(-0.0) == "-0"
