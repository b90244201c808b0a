"""
Lua Value Representation

A single dynamically typed value handle for an embedded Lua-style runtime.
Values carry a type tag and a payload, and support ordering, hashing,
truthiness, numeric coercion, table indexing and arithmetic.
"""

__version__ = "0.1.0"


from ._error import *
from ._type import *
from ._kind import *
from ._numeral import *
from ._table import *
from ._value import *
from ._ops import *
from ._fmt import *
