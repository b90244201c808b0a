"""
Tests for string to number coercion.

Strings convert with the Lua numeral rules: optional surrounding
whitespace, an optional sign, decimal or hexadecimal digits, optional
fraction and exponent. Anything else becomes nan.
"""

import math

import pytest

import luaval


@pytest.mark.parametrize("text,expected", [
    ("42", 42.0),
    ("-17", -17.0),
    ("+3", 3.0),
    ("0", 0.0),
    ("3.5", 3.5),
    ("5.", 5.0),
    (".25", 0.25),
    ("1e3", 1000.0),
    ("-2.5e+2", -250.0),
    ("1E-1", luaval.to_f32(0.1)),
    ("  12  ", 12.0),
    ("\t\n7\r", 7.0),
])
def test_decimal_numerals(text, expected):
    assert luaval.parse_number(text) == expected


@pytest.mark.parametrize("text,expected", [
    ("0x10", 16.0),
    ("0XfF", 255.0),
    ("-0x10", -16.0),
    ("0x.8", 0.5),
    ("0x1p4", 16.0),
    ("0x1.8P1", 3.0),
    ("0xAp-1", 5.0),
])
def test_hex_numerals(text, expected):
    assert luaval.parse_number(text) == expected


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "abc",
    "1e",
    "0x",
    "- 5",
    "1 2",
    "12abc",
    "inf",
    "infinity",
    "-inf",
    "nan",
    "1_000",
    "0b101",
    "--1",
])
def test_malformed_numerals(text):
    with pytest.raises(ValueError):
        luaval.parse_number(text)


def test_overflow_is_infinite():
    assert luaval.parse_number("1e999") == math.inf
    assert luaval.parse_number("-1e40") == -math.inf
    assert luaval.parse_number("0x1p99999") == math.inf
    assert luaval.parse_number("-0x1p99999") == -math.inf


def test_str_to_number():
    assert luaval.str_to_number(b"42") == 42.0
    assert math.isnan(luaval.str_to_number(b"abc"))
    assert math.isnan(luaval.str_to_number(b"\xff1"))


def test_string_values_coerce():
    assert luaval.Value.string("42").as_number() == 42.0
    assert math.isnan(luaval.Value.string("abc").as_number())
