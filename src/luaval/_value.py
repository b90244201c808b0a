"""Runtime values"""

__all__ = ["Value", "NIL", "validate"]

import logging
import math

import luaval


_log = logging.getLogger(__name__)


class Value:
    """Lua runtime value.

    Represents any of the kinds of data a Lua program can hold: nil,
    booleans, numbers, strings, functions, userdata, threads and tables.
    The value stores a type tag beside the payload, and the tag always
    matches the payload's Python type as bound in `luaval.kind_of`.

    Values are immutable. Payloads are shared between values rather than
    copied, and a table payload is frozen once it is wrapped. Operations
    that change a table, like `with_index`, build a new value.

    Use the classmethod constructors (`number`, `string`, `table`...) or
    `from_python` to build values from looser Python data.

    Args:
        payload: Instance of a bound payload type (None, bool, float,
            bytes, Function, Userdata, Thread or Table)
    Raises:
        TypeError: If the payload type is not bound to a kind
    """

    __slots__ = ("_type", "_payload")

    def __init__(self, payload):
        if isinstance(payload, Value):
            # Values share references to each other instead of nesting
            raise TypeError(f"Value init called with existing Value {payload!r}")

        kind = luaval.kind_of(type(payload))
        if kind is None:
            raise TypeError(f"Cannot make a Value from {type(payload).__name__}")

        if kind is luaval.Type.NUMBER:
            payload = luaval.to_f32(payload)
        elif kind is luaval.Type.TABLE:
            payload.freeze()

        self._type = kind
        self._payload = payload

    @classmethod
    def nil(cls):
        """(Value) The canonical nil value."""
        return NIL

    @classmethod
    def boolean(cls, flag):
        return TRUE if flag else FALSE

    @classmethod
    def number(cls, number):
        """Number value from any real number, rounded to single precision.

        Integers too large for a float become infinite.
        """
        try:
            return cls(float(number))
        except OverflowError:
            return cls(math.inf if number > 0 else -math.inf)

    @classmethod
    def string(cls, text):
        """String value from bytes or text (encoded as UTF-8).

        Raises:
            TypeError: If text is not str, bytes, bytearray or memoryview
        """
        if isinstance(text, str):
            text = text.encode("utf-8")
        elif not isinstance(text, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot make a string from {type(text).__name__}")
        return cls(bytes(text))

    @classmethod
    def function(cls, fn, name=None):
        return cls(luaval.Function(fn, name))

    @classmethod
    def userdata(cls, obj, release=None):
        return cls(luaval.Userdata(obj, release))

    @classmethod
    def thread(cls, name=None):
        return cls(luaval.Thread(name))

    @classmethod
    def table(cls, items=None):
        """Table value holding the given key/value pairs.

        Args:
            items: (Mapping | Iterable | None) Pairs of Values
        Raises:
            InvalidKeyError: If any key is nil or nan
        """
        table = luaval.Table()
        if items is not None:
            if hasattr(items, "items"):
                items = items.items()
            for key, value in items:
                if not key.is_index():
                    raise luaval.InvalidKeyError(key)
                if value._type is not luaval.Type.NIL:
                    table.set(key, value)
        return cls(table)

    def type_of(self):
        """(Type) Kind of this value."""
        return self._type

    def is_index(self):
        """Check if the value may be used as a table key.

        Nil and nan are the only values that cannot index a table.

        Returns:
            (bool) True if usable as a key
        """
        if self._type is luaval.Type.NIL:
            return False
        if self._type is luaval.Type.NUMBER:
            return not luaval.is_nan(self._payload)
        return True

    def to_bool(self):
        """Truthiness, only nil and false are false.

        Returns:
            (bool) Truth value for conditionals
        """
        if self._type is luaval.Type.NIL:
            return False
        if self._type is luaval.Type.BOOLEAN:
            return self._payload
        return True

    __bool__ = to_bool

    def as_number(self):
        """Coerce into a number for arithmetic.

        Numbers return themselves and strings are parsed as numerals. Every
        other kind, and any string that is not a numeral, gives nan.

        Returns:
            (float) Coerced number
        """
        match self._type:
            case luaval.Type.NUMBER:
                return self._payload
            case luaval.Type.STRING:
                return luaval.str_to_number(self._payload)
        _log.debug("%s value coerced to nan", self._type)
        return luaval.NAN

    def get_index(self, key):
        """Look up a key in a table value.

        Indexing never fails, a missing key or a value that is not a table
        both give nil.

        Args:
            key: (Value) Key to find
        Returns:
            (Value) Stored value or nil
        """
        table = luaval.recover(self, luaval.Table)
        if table is None:
            return NIL
        return table.get(key, NIL)

    def with_index(self, key, value):
        """Copy of this table with one key changed.

        Storing nil removes the key. The original table is unchanged.

        Args:
            key: (Value) Key to set
            value: (Value) Value to store
        Returns:
            (Value) New table value
        Raises:
            OperationError: If this value is not a table
            InvalidKeyError: If the key is nil or nan
        """
        table = luaval.recover(self, luaval.Table)
        if table is None:
            raise luaval.OperationError("index", self._type)
        if not key.is_index():
            raise luaval.InvalidKeyError(key)

        table = table.copy()
        if value._type is luaval.Type.NIL:
            if key in table:
                table.remove(key)
        else:
            table.set(key, value)
        _log.debug("rebuilt table with %d entries", len(table))
        return Value(table)

    def format(self):
        """Convert value to a Lua literal expression.

        Returns:
            (str) Representation suitable for display
        """
        return luaval.literal(self)

    def to_python(self):
        """Convert this value to a Python equivalent.

        Tables become dicts, strings become text when they decode as UTF-8,
        and reference kinds other than tables return their payload.

        Table keys of a reference kind become their payload object (the
        Table, Function, Userdata or Thread) since a converted table
        cannot be a dict key.

        Returns:
            (object) Converted python value
        Raises:
            TypeError: If two distinct table keys convert to equal Python
                keys, like `true` and `1`
        """
        match self._type:
            case luaval.Type.STRING:
                try:
                    return self._payload.decode("utf-8")
                except UnicodeDecodeError:
                    return self._payload
            case luaval.Type.USERDATA:
                return self._payload.obj
            case luaval.Type.TABLE:
                result = {}
                for key, val in self._payload.items():
                    if key._type.is_reference:
                        pykey = key._payload
                    else:
                        pykey = key.to_python()
                    if pykey in result:
                        raise TypeError(f"Table key {key.format()} collides with another key in Python")
                    result[pykey] = val.to_python()
                return result
        return self._payload

    @classmethod
    def from_python(cls, value):
        """Convert Python values into Lua Values.

        Lists and tuples become tables keyed from 1, dicts become tables,
        callables become functions. Dict entries with None values are
        dropped, as storing nil in a table removes the key.

        Args:
            value: Python value to convert
        Returns:
            (Value) Lua Value equivalent
        Raises:
            TypeError: If value is already a Value or cannot be converted
        """
        if isinstance(value, Value):
            raise TypeError("from_python called with existing Value")

        if value is None:
            return NIL
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, (int, float)):
            return cls.number(value)
        if isinstance(value, (str, bytes, bytearray)):
            return cls.string(value)
        if isinstance(value, (luaval.Function, luaval.Userdata, luaval.Thread, luaval.Table)):
            return cls(value)

        if isinstance(value, dict):
            return cls.table(
                (cls.from_python(k), cls.from_python(v)) for k, v in value.items()
            )
        if isinstance(value, (tuple, list)):
            return cls.table(
                (cls.number(i), cls.from_python(v)) for i, v in enumerate(value, 1)
            )
        if callable(value):
            return cls.function(value)

        raise TypeError(f"Cannot convert Python type {type(value).__name__} to Lua Value")

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.equal(self, other)

    def __hash__(self):
        return luaval.hash_key(self)

    def __lt__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.order(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.order(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.order(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.order(self, other) >= 0

    def __add__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.arith("+", self, other)

    def __sub__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.arith("-", self, other)

    def __mul__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.arith("*", self, other)

    def __truediv__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return luaval.arith("/", self, other)

    def __neg__(self):
        return luaval.negate(self)

    def __str__(self):
        return luaval.display(self)

    def __repr__(self):
        return f"Value({self.format()})"

    def __setattr__(self, name, value):
        if hasattr(self, "_payload"):
            raise AttributeError(f"Value is immutable, cannot set {name}")
        super().__setattr__(name, value)


NIL = Value(None)
TRUE = Value(True)
FALSE = Value(False)


def validate(value):
    """Validate that a Value is in a proper state.

    This isn't regularly done during runtime. It can be used for testing
    or analysis tools to detect problems with the runtime.

    Args:
        value: (Value) object to check
    Raises:
        (Exception) if any type of problem is found
    """
    if not isinstance(value, Value):
        raise TypeError(f"Expected Value, got {type(value).__name__}")

    kind = luaval.kind_of(type(value._payload))
    if kind is not value._type:
        raise luaval.LuaError(
            f"Value tagged {value._type} holds {type(value._payload).__name__} payload"
        )

    if kind is luaval.Type.NUMBER and luaval.to_f32(value._payload) != value._payload:
        if not math.isnan(value._payload):
            raise luaval.LuaError(f"Number {value._payload!r} is not single precision")

    if kind is luaval.Type.TABLE:
        table = value._payload
        if not table.frozen:
            raise luaval.LuaError("Table payload was not frozen")
        for key, val in table.items():
            if not isinstance(key, Value) or not isinstance(val, Value):
                raise TypeError(f"Invalid table entry {key!r}={val!r}")
            if not key.is_index():
                raise luaval.InvalidKeyError(key)
            if val._type is luaval.Type.NIL:
                raise luaval.LuaError(f"Table stores nil under {key!r}")
            validate(key)
            validate(val)
