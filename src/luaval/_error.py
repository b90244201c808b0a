"""Error classes for the value layer"""

__all__ = ["LuaError", "OperationError", "OrderError", "InvalidKeyError"]

import luaval


class LuaError(Exception):
    """Error raised by an operation on Lua values."""


class OperationError(LuaError):
    """Operation is not supported for a kind of value.

    Args:
        operation: (str) Name of the attempted operation
        kind: (Type) Type of the offending value

    Attributes:
        operation: (str) Name of the attempted operation
        kind: (Type) Type of the offending value
    """

    def __init__(self, operation, kind):
        self.operation = operation
        self.kind = kind
        super().__init__(f"attempt to {operation} a {kind} value")


class OrderError(LuaError):
    """Values cannot be placed in the total order (nan involved)."""


class InvalidKeyError(LuaError):
    """Value cannot be used as a table key.

    Args:
        key: (Value) The rejected key

    Attributes:
        key: (Value) The rejected key
    """

    def __init__(self, key):
        self.key = key
        if key.type_of() is luaval.Type.NIL:
            message = "table index is nil"
        else:
            message = "table index is NaN"
        super().__init__(message)
