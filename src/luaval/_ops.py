"""Perform builtin operations on Values.

Equality, ordering and hashing dispatch on the type tag and only then look
at payloads, so two values of different kinds are never compared by their
payloads. Arithmetic coerces both operands to numbers first and never
fails, operands that do not convert become nan.

There is generally a function here for each of the operator nodes an
evaluator would need.
"""

__all__ = [
    "equal",
    "order",
    "hash_key",
    "arith",
    "negate",
    "compare",
]

import math

import luaval
from ._kind import _recover_unchecked


def equal(left, right):
    """Raw equality of two Values.

    Args:
        left: (Value) Left value
        right: (Value) Right value

    Returns:
        (bool) True if values are equal
    """
    kind = left.type_of()
    if kind is not right.type_of():
        return False

    lval = _recover_unchecked(left)
    rval = _recover_unchecked(right)
    if kind.is_reference:
        return lval is rval
    if kind is luaval.Type.NIL:
        return True
    # Booleans, numbers (nan never equal) and byte strings
    return lval == rval


def order(left, right):
    """Position of two values in the total order.

    Values of different kinds are ordered by their type tag. Values of the
    same kind order by payload: false before true, numbers numerically,
    strings byte by byte, and reference kinds by creation.

    Args:
        left: (Value) Left value
        right: (Value) Right value

    Returns:
        (int) Negative, zero or positive like a classic cmp function

    Raises:
        OrderError: If either value is nan
    """
    lkind = left.type_of()
    rkind = right.type_of()
    if lkind is not rkind:
        return -1 if lkind < rkind else 1

    lval = _recover_unchecked(left)
    rval = _recover_unchecked(right)
    match lkind:
        case luaval.Type.NIL:
            return 0
        case luaval.Type.NUMBER:
            if luaval.is_nan(lval) or luaval.is_nan(rval):
                raise luaval.OrderError(f"Cannot order {left.format()} and {right.format()}")
        case luaval.Type.FUNCTION | luaval.Type.USERDATA | luaval.Type.THREAD | luaval.Type.TABLE:
            lval = lval.serial
            rval = rval.serial

    if lval == rval:
        return 0
    return -1 if lval < rval else 1


def hash_key(value):
    """Hash consistent with `equal`.

    Numbers hash their single precision bit pattern rather than their
    value. Negative zero is hashed as positive zero since the two compare
    equal.

    Args:
        value: (Value) Value to hash

    Returns:
        (int) Hash value
    """
    kind = value.type_of()
    payload = _recover_unchecked(value)
    if kind is luaval.Type.NUMBER:
        if payload == 0.0:
            payload = 0.0
        payload = luaval.f32_bits(payload)
    elif kind.is_reference:
        payload = payload.serial
    return hash((int(kind), payload))


def _divide(lval, rval):
    # IEEE division, Python raises on zero divisors
    if rval != 0.0:
        return lval / rval
    if lval == 0.0 or math.isnan(lval):
        return math.nan
    return math.copysign(math.inf, lval) * math.copysign(1.0, rval)


def arith(op, left, right):
    """Math binary operation.

    Both operands are coerced with `as_number`, so strings holding
    numerals take part and any other operand turns the result into nan.

    Args:
        op: (str) Operator like "+" "-" "*" "/"
        left: (Value) Left value
        right: (Value) Right value

    Returns:
        (Value) Number result of the operation

    Raises:
        ValueError: If the operator is unknown
    """
    lval = left.as_number()
    rval = right.as_number()

    if op == "+":
        result = lval + rval
    elif op == "-":
        result = lval - rval
    elif op == "*":
        result = lval * rval
    elif op == "/":
        result = _divide(lval, rval)
    else:
        raise ValueError(f"Unknown math binary operator: {op}")

    return luaval.Value(result)


def negate(value):
    """Unary minus of a value coerced to a number.

    Args:
        value: (Value) Operand

    Returns:
        (Value) Negated number
    """
    return luaval.Value(-value.as_number())


def compare(op, left, right):
    """Comparison operation.

    Equality works on any pair of values. The ordering operators use the
    total order, so they also accept mixed kinds.

    Args:
        op: (str) Operator like "==" "~=" "<" "<=" ">" ">="
        left: (Value) Left value
        right: (Value) Right value

    Returns:
        (Value) Boolean value

    Raises:
        OrderError: If an ordering operator meets nan
        ValueError: If the operator is unknown
    """
    match op:
        case "==":
            return luaval.Value(equal(left, right))
        case "~=":
            return luaval.Value(not equal(left, right))
        case "<":
            return luaval.Value(order(left, right) < 0)
        case "<=":
            return luaval.Value(order(left, right) <= 0)
        case ">":
            return luaval.Value(order(left, right) > 0)
        case ">=":
            return luaval.Value(order(left, right) >= 0)

    raise ValueError(f"Unknown comparison operator: {op}")
