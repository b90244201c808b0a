"""Ordered table payload"""

__all__ = ["Table"]

import bisect

import luaval


class Table(luaval.Reference):
    """Associative array from Value keys to Value values.

    Keys are kept sorted by the total order of values, so iteration always
    follows key order no matter how the table was built. Lookup goes
    through a dict, which relies on value hashing agreeing with equality.

    The table does not check keys itself. Callers building a table must
    reject nil and nan keys with `Value.is_index` before calling `set`.

    Once a table is wrapped into a Value it is frozen and any further
    mutation raises. Use `copy` to get a mutable table with the same
    contents.

    Args:
        items: (Mapping | Iterable | None) Initial key/value pairs
    """

    __slots__ = ("_data", "_keys", "_frozen")

    def __init__(self, items=None):
        super().__init__()
        self._data = {}
        self._keys = []
        self._frozen = False
        if items is None:
            return
        if hasattr(items, "items"):
            items = items.items()
        for key, value in items:
            self.set(key, value)

    @property
    def frozen(self):
        """(bool) Table no longer accepts changes."""
        return self._frozen

    def freeze(self):
        """Prevent any further changes to the table."""
        self._frozen = True

    def _check_mutable(self):
        if self._frozen:
            raise TypeError("Table has been frozen into a value and cannot change")

    def get(self, key, default=None):
        """Value stored for key, or the default."""
        return self._data.get(key, default)

    def set(self, key, value):
        """Store value under key, replacing any existing entry.

        Args:
            key: (Value) Key, must pass `is_index`
            value: (Value) Value to store
        """
        self._check_mutable()
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = value

    def remove(self, key):
        """Remove the entry for key.

        Args:
            key: (Value) Key to remove
        Returns:
            (Value) The removed value
        Raises:
            KeyError: If the key is not present
        """
        self._check_mutable()
        value = self._data.pop(key)
        index = bisect.bisect_left(self._keys, key)
        del self._keys[index]
        return value

    def next(self, key=None):
        """Entry following key in key order.

        A nil or missing key starts from the first entry.

        Args:
            key: (Value | None) Previous key
        Returns:
            (tuple[Value, Value] | None) Next key and value, None past the end
        Raises:
            KeyError: If key is not present in the table
        """
        if key is None or key.type_of() is luaval.Type.NIL:
            index = 0
        else:
            if key not in self._data:
                raise KeyError(key)
            index = bisect.bisect_right(self._keys, key)
        if index >= len(self._keys):
            return None
        found = self._keys[index]
        return found, self._data[found]

    def copy(self):
        """New mutable table with the same entries."""
        table = Table()
        table._data = dict(self._data)
        table._keys = list(self._keys)
        return table

    def keys(self):
        return list(self._keys)

    def values(self):
        return [self._data[key] for key in self._keys]

    def items(self):
        return [(key, self._data[key]) for key in self._keys]

    def __contains__(self, key):
        return key in self._data

    def __iter__(self):
        return iter(list(self._keys))

    def __len__(self):
        return len(self._keys)

    def __repr__(self):
        return f"Table<{len(self._keys)}>"
