"""Binding between payload types and type tags.

Every payload stored in a Value has exactly one Python type, and every one
of those types is bound to exactly one Type tag. The functions here are the
only place a payload is wrapped into a Value or pulled back out of one.
"""

__all__ = [
    "Reference",
    "Function",
    "Userdata",
    "Thread",
    "kind_of",
    "erase",
    "recover",
    "to_f32",
    "f32_bits",
    "is_nan",
    "NAN",
]

import itertools
import math
import struct
import weakref

import luaval


_serials = itertools.count(1)

NAN = float("nan")


class Reference:
    """Base for payloads that are compared by identity.

    Each instance gets a serial number when created. The serial is unique
    for the life of the process and provides a stable ordering and hash
    for the functions, userdata, threads and tables that hold it.

    Attributes:
        serial: (int) Creation order of this payload
    """

    __slots__ = ("serial", "__weakref__")

    def __init__(self):
        self.serial = next(_serials)


class Function(Reference):
    """Callable payload wrapping a Python function.

    The function receives Values as positional arguments and returns a Value.

    Args:
        fn: (callable) Host implementation
        name: (str | None) Optional name for diagnostics
    """

    __slots__ = ("fn", "name")

    def __init__(self, fn, name=None):
        if not callable(fn):
            raise TypeError(f"Function payload must be callable, got {type(fn).__name__}")
        super().__init__()
        self.fn = fn
        self.name = name or getattr(fn, "__name__", None)

    def __call__(self, *args):
        return self.fn(*args)

    def __repr__(self):
        return f"Function<{self.name}>"


class Userdata(Reference):
    """Opaque box around a host object.

    An optional release callback is invoked with the host object exactly
    once, when the box itself is collected.

    Args:
        obj: (object) Host object
        release: (callable | None) Called as `release(obj)` on collection
    """

    __slots__ = ("obj", "_finalizer")

    def __init__(self, obj, release=None):
        super().__init__()
        self.obj = obj
        self._finalizer = None
        if release is not None:
            self._finalizer = weakref.finalize(self, release, obj)

    @property
    def released(self):
        """(bool) Release callback already ran."""
        return self._finalizer is not None and not self._finalizer.alive

    def __repr__(self):
        return f"Userdata<{type(self.obj).__name__}>"


class Thread(Reference):
    """Opaque marker for an independent thread of execution.

    Args:
        name: (str | None) Optional name for diagnostics
    """

    __slots__ = ("name",)

    def __init__(self, name=None):
        super().__init__()
        self.name = name

    def __repr__(self):
        return f"Thread<{self.name or self.serial}>"


_kinds = None


def _kind_table():
    # Table lives in its own module that imports this one
    global _kinds
    if _kinds is None:
        _kinds = {
            type(None): luaval.Type.NIL,
            bool: luaval.Type.BOOLEAN,
            float: luaval.Type.NUMBER,
            bytes: luaval.Type.STRING,
            Function: luaval.Type.FUNCTION,
            Userdata: luaval.Type.USERDATA,
            Thread: luaval.Type.THREAD,
            luaval.Table: luaval.Type.TABLE,
        }
    return _kinds


def kind_of(payload_type):
    """Type tag bound to a payload type.

    Matching is by exact type, so `bool` is never treated as a number
    and subclasses are not bound.

    Args:
        payload_type: (type) Python type of a payload
    Returns:
        (Type | None) Bound tag, or None when the type is not bound
    """
    return _kind_table().get(payload_type)


def erase(payload):
    """Wrap a payload into a Value.

    Args:
        payload: (object) Instance of a bound payload type
    Returns:
        (Value) Value tagged with the payload's kind
    Raises:
        TypeError: If the payload type is not bound
    """
    return luaval.Value(payload)


def _recover_unchecked(value):
    """Payload of a value, without looking at its tag.

    Callers must already know the tag matches the payload type they expect.
    """
    return value._payload


def recover(value, payload_type, default=None):
    """Payload of a value if it holds the given payload type.

    A mismatch is not an error, it returns the default so callers can try
    other kinds.

    Args:
        value: (Value) Value to look into
        payload_type: (type) Expected payload type
        default: (object) Returned when the tag does not match
    Returns:
        (object) The payload or the default
    """
    kind = kind_of(payload_type)
    if kind is None or value.type_of() is not kind:
        return default
    return _recover_unchecked(value)


def to_f32(number):
    """Round a float to the nearest single precision value.

    Values too large for single precision become infinite.

    Args:
        number: (float) Value to round
    Returns:
        (float) Rounded value
    """
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def f32_bits(number):
    """Raw bit pattern of a single precision number.

    Args:
        number: (float) Value representable in single precision
    Returns:
        (int) Unsigned 32 bit integer
    """
    return struct.unpack("<I", struct.pack("<f", number))[0]


def is_nan(number):
    """Check for the not-a-number bit pattern.

    Args:
        number: (float) Value to check
    Returns:
        (bool) True when exponent bits are all set and the mantissa is not zero
    """
    bits = f32_bits(to_f32(number))
    return (bits & 0x7F800000) == 0x7F800000 and (bits & 0x007FFFFF) != 0
