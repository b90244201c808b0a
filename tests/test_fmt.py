"""Tests for value display and literal formatting."""

import math

import pytest

import luaval
from luaval import Value


@pytest.mark.parametrize("number,text", [
    (156, "156"),
    (0, "0"),
    (-2, "-2"),
    (0.5, "0.5"),
    (0.1, "0.1"),
    (3.14, "3.14"),
    (1e20, "1e+20"),
    (math.inf, "inf"),
    (-math.inf, "-inf"),
    (math.nan, "nan"),
])
def test_display_numbers(number, text):
    assert str(Value.number(number)) == text


def test_display_simple_kinds():
    assert str(Value.nil()) == "nil"
    assert str(Value.boolean(True)) == "true"
    assert str(Value.boolean(False)) == "false"
    assert str(Value.string("hello")) == "hello"
    assert str(Value.string(b"\xff")) == "\ufffd"


def test_display_references():
    for value, prefix in [
        (Value.function(len), "function: 0x"),
        (Value.userdata(object()), "userdata: 0x"),
        (Value.thread(), "thread: 0x"),
        (Value.table(), "table: 0x"),
    ]:
        assert str(value).startswith(prefix)
    table = Value.table()
    serial = luaval.recover(table, luaval.Table).serial
    assert str(table) == f"table: 0x{serial:08x}"


def test_format_numbers_round_trip():
    for number in [0.1, 1 / 3, 123456.789, 1e-7, 16777217]:
        rounded = luaval.to_f32(number)
        assert luaval.to_f32(float(luaval.format_number(rounded))) == rounded


def test_literal_strings():
    assert Value.string('say "hi"\n').format() == '"say \\"hi\\"\\n"'
    assert Value.string(b"\x01" + b"2").format() == '"\\0012"'
    assert Value.string(b"\xc3").format() == '"\\195"'


def test_literal_table():
    value = Value.from_python({"b": "x", "a": [True]})
    assert value.format() == '{["a"]={[1]=true}, ["b"]="x"}'


def test_repr():
    assert repr(Value.nil()) == "Value(nil)"
    assert repr(Value.string("s")) == 'Value("s")'
    assert repr(Value.number(2)) == "Value(2)"
