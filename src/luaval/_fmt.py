"""Text rendering of values.

Public API
----------
format_number(n) → str    shortest text that reads back as the same number
display(value)   → str    text as `print` would show it
literal(value)   → str    Lua source form, strings quoted and tables expanded
"""

__all__ = ["format_number", "display", "literal"]

import math

import luaval
from ._kind import _recover_unchecked


_ESCAPES = {
    ord("\\"): "\\\\",
    ord('"'): '\\"',
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord("\a"): "\\a",
    ord("\b"): "\\b",
    ord("\f"): "\\f",
    ord("\v"): "\\v",
}


def format_number(number):
    """Shortest text that converts back to the same single precision number.

    Integral values have no fraction ("156"), very large or small values
    use an exponent ("1e+20").

    Args:
        number: (float) Single precision value
    Returns:
        (str) Number text
    """
    if math.isnan(number):
        return "-nan" if math.copysign(1.0, number) < 0 else "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    for digits in range(1, 10):
        text = f"{number:.{digits}g}"
        if luaval.to_f32(float(text)) == number:
            return text
    return repr(number)


def display(value):
    """Text for a value as shown by print.

    Args:
        value: (Value) Value to render
    Returns:
        (str) Display text
    """
    kind = value.type_of()
    payload = _recover_unchecked(value)
    match kind:
        case luaval.Type.NIL:
            return "nil"
        case luaval.Type.BOOLEAN:
            return "true" if payload else "false"
        case luaval.Type.NUMBER:
            return format_number(payload)
        case luaval.Type.STRING:
            return payload.decode("utf-8", "replace")
    return f"{kind}: 0x{payload.serial:08x}"


def _quote(data):
    parts = ['"']
    for byte in data:
        escape = _ESCAPES.get(byte)
        if escape is not None:
            parts.append(escape)
        elif byte < 0x20 or byte >= 0x7F:
            parts.append(f"\\{byte:03d}")
        else:
            parts.append(chr(byte))
    parts.append('"')
    return "".join(parts)


def literal(value):
    """Lua source text for a value.

    Strings are quoted with non printable bytes escaped in decimal. Tables
    are written as constructors with explicit keys. Functions, userdata
    and threads have no literal form and use their display text.

    Args:
        value: (Value) Value to render
    Returns:
        (str) Literal text
    """
    kind = value.type_of()
    if kind is luaval.Type.STRING:
        return _quote(_recover_unchecked(value))
    if kind is luaval.Type.TABLE:
        fields = [
            f"[{literal(key)}]={literal(val)}"
            for key, val in _recover_unchecked(value).items()
        ]
        return "{" + ", ".join(fields) + "}"
    return display(value)
