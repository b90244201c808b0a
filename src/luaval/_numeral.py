"""
Numeral parsing for string to number coercion.

Strings take part in arithmetic by converting them with the same rules
Lua uses for `tonumber`: optional whitespace around an optionally signed
decimal or hexadecimal numeral. Anything else converts to nan.

Spellings like "inf", "infinity" and "nan" are rejected on purpose, as
Lua rejects them, even though Python's float() would accept them.
"""

__all__ = ["parse_number", "str_to_number"]

import logging
import math

import lark

import luaval


_log = logging.getLogger(__name__)

# Whitespace as defined by C isspace
_SPACE = " \t\n\v\f\r"

_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(path, rel_to=__file__, parser="lalr")
    _parsers[name] = parser
    return parser


def parse_number(text):
    """Parse a Lua numeral.

    Args:
        text: (str) Numeral text, surrounding whitespace is allowed
    Returns:
        (float) Parsed value rounded to single precision
    Raises:
        ValueError: If the text is not a numeral
    """
    stripped = text.strip(_SPACE)
    try:
        tree = _lark_parser("numeral").parse(stripped)
    except lark.exceptions.UnexpectedInput as err:
        raise ValueError(f"Malformed number {text!r}") from err

    sign = ""
    for token in tree.children:
        if token.type == "SIGN":
            sign = str(token)
        elif token.type == "HEX":
            try:
                return luaval.to_f32(float.fromhex(sign + str(token)))
            except OverflowError:
                return -math.inf if sign == "-" else math.inf
        else:
            return luaval.to_f32(float(sign + str(token)))
    raise ValueError(f"Malformed number {text!r}")


def str_to_number(data):
    """Convert string payload bytes to a number.

    Conversion failures are not errors, they produce nan.

    Args:
        data: (bytes) String payload
    Returns:
        (float) Converted number or nan
    """
    try:
        return parse_number(data.decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        _log.debug("string %r does not convert to a number", data)
        return luaval.NAN
