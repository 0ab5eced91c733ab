"""测试 jxml API 层."""

import io

import pytest

from jxml import (
    CharData,
    ConvertOption,
    EndElement,
    JsonSourceError,
    NamingScheme,
    StartElement,
    XmlSinkError,
    dump,
    dumps,
    iter_tokens,
)


def test_dumps_default_is_well_formed() -> None:
    """dumps() 默认保留键名, 结束标签与开始标签一致."""
    xml = dumps('{"a": 1, "b": {"c": "x"}}')

    assert xml == (
        "<root>\n"
        "  <object>\n"
        "    <a>1</a>\n"
        "    <b>\n"
        "      <c>x</c>\n"
        "    </b>\n"
        "  </object>\n"
        "</root>"
    )


def test_dumps_key_bound_array() -> None:
    """dumps() 对键绑定数组重复使用键名."""
    xml = dumps('{"tags": ["x", "y"]}', indent=0)

    assert xml == (
        "<root><object><tags><tags>x</tags><tags>y</tags></tags></object></root>"
    )


def test_dumps_flatten_arrays() -> None:
    """FLATTEN_ARRAYS 输出重复的兄弟元素而不是嵌套容器."""
    xml = dumps(
        '{"tags": ["x", "y"]}',
        option=ConvertOption.RETAIN_KEYS | ConvertOption.FLATTEN_ARRAYS,
        indent=0,
    )

    assert xml == "<root><object><tags>x</tags><tags>y</tags></object></root>"


def test_dumps_compat_naming_strict_fails() -> None:
    """原始命名规则产生不一致的标签, 严格写入器会拒绝."""
    with pytest.raises(XmlSinkError, match="</number>"):
        dumps('{"a": 1}', option=ConvertOption.NONE)


def test_dumps_compat_naming_lenient() -> None:
    """原始命名规则配合非严格写入器保留原有输出."""
    xml = dumps('{"a": 1}', option=ConvertOption.NONE, strict_tags=False, indent="")

    assert xml == "<root><object><a>1</number></object></root>"


def test_dumps_escapes_text() -> None:
    """字符串中的标记字符在输出中被转义."""
    xml = dumps('["<b> & </b>"]', indent="")

    assert xml == (
        "<root><array><string>&lt;b&gt; &amp; &lt;/b&gt;</string></array></root>"
    )


def test_dumps_numbers() -> None:
    """数字保持源文本中的精度, 指数展开为定点记法."""
    xml = dumps("[1.50, 1e3, -0, 12345678901234567890]", indent="")

    assert xml == (
        "<root><array>"
        "<number>1.50</number><number>1000</number>"
        "<number>0</number><number>12345678901234567890</number>"
        "</array></root>"
    )


def test_dumps_huge_exponent_stays_compact() -> None:
    """指数很大的数字保留科学记数法, 输出长度与输入同阶."""
    xml = dumps("[1e5000000]", indent="")

    assert xml == "<root><array><number>1E+5000000</number></array></root>"


def test_dumps_negative_zero() -> None:
    """整数 -0 被解码为 0, 带小数部分的 -0.0 保留符号."""
    xml = dumps("[-0, -0.0]", indent="")

    assert xml == (
        "<root><array><number>0</number><number>-0.0</number></array></root>"
    )


def test_dumps_use_float() -> None:
    """USE_FLOAT 下数字使用最短的浮点表示."""
    xml = dumps(
        "[1.50]",
        option=ConvertOption.RETAIN_KEYS | ConvertOption.USE_FLOAT,
        indent="",
    )

    assert xml == "<root><array><number>1.5</number></array></root>"


def test_dumps_custom_naming() -> None:
    """dumps() 支持自定义默认元素名."""
    xml = dumps("[true]", naming=NamingScheme(boolean="flag", root="doc"), indent="")

    assert xml == "<doc><array><flag>true</flag></array></doc>"


def test_dumps_declaration() -> None:
    """xml_declaration=True 时输出 XML 声明."""
    assert dumps("null", xml_declaration=True).startswith("<?xml")


def test_dumps_invalid_json() -> None:
    """非法 JSON 抛出 JsonSourceError."""
    with pytest.raises(JsonSourceError):
        dumps('{"a": ')


def test_dump_streams_file() -> None:
    """dump() 从文件对象读取并写入输出流, 返回令牌数."""
    out = io.StringIO()

    count = dump(io.BytesIO(b"[true, null]"), out, indent=0)

    assert out.getvalue() == (
        "<root><array><boolean>true</boolean><null></null></array></root>"
    )
    assert count == 10


def test_dump_keeps_partial_output() -> None:
    """dump() 出错时已写入的输出仍保留在输出流中."""
    out = io.StringIO()

    with pytest.raises(JsonSourceError):
        dump(io.BytesIO(b'["a", "b", '), out, indent=0)

    assert out.getvalue() == "<root><array><string>a</string><string>b</string>"


def test_iter_tokens() -> None:
    """iter_tokens() 逐个产生包含根元素的 XML 令牌."""
    assert list(iter_tokens('"hi"')) == [
        StartElement("root"),
        StartElement("string"),
        CharData("hi"),
        EndElement("string"),
        EndElement("root"),
    ]


def test_repeated_runs_identical() -> None:
    """相同输入多次转换结果逐字节一致."""
    document = '{"a": [1, {"b": null}], "c": "d"}'

    assert dumps(document) == dumps(document)
