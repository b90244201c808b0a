"""Type tags for Lua values"""

__all__ = ["Type"]

import enum


class Type(enum.IntEnum):
    """Kind of a Lua value.

    The declaration order is the order used when comparing values of
    different kinds, nil sorting first and table last.
    """

    NIL = 0
    BOOLEAN = 1
    NUMBER = 2
    STRING = 3
    FUNCTION = 4
    USERDATA = 5
    THREAD = 6
    TABLE = 7

    def __str__(self):
        return self.name.lower()

    @property
    def is_reference(self):
        """(bool) Values of this kind compare by identity."""
        return self >= Type.FUNCTION
