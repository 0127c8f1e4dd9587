"""
Ordered value model for message JSON.

Signed payload bytes depend on the order keys were written in, so objects
keep an explicit list of (key, value) pairs; a key -> index map next to it
keeps lookups and assignment constant time.
Numbers keep their source text so they re-encode without reformatting.

OrderedValue is one of:
    None, bool, Number, str, list of OrderedValue, OrderedObject
"""

import math
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union


class Number:
    """
    JSON number that remembers its textual form.

    Fields:
        text: Number literal as it appeared in the source (or as rendered
              from a Python int/float)
    """

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    @classmethod
    def from_value(cls, value: Union[int, float]) -> "Number":
        """
        Build a Number from a Python int or float.

        Raises:
            ValueError: If value is NaN or infinite
        """
        if isinstance(value, bool):
            raise TypeError("bool is not a JSON number")
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"non-finite number: {value!r}")
            return cls(repr(value))
        return cls(str(int(value)))

    def to_python(self) -> Union[int, float]:
        try:
            return int(self.text)
        except ValueError:
            return float(self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return Decimal(self.text) == Decimal(other.text)

    def __hash__(self) -> int:
        return hash(Decimal(self.text))

    def __repr__(self) -> str:
        return f"Number({self.text!r})"


class OrderedObject:
    """
    JSON object with insertion-ordered, unique keys.

    Setting an existing key replaces its value but keeps its position,
    which matches how the reference stringifier treats duplicate keys.
    Equality is order-sensitive.
    """

    __slots__ = ("_pairs", "_positions")

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None) -> None:
        self._pairs: List[Tuple[str, Any]] = []
        # key -> index into _pairs
        self._positions: Dict[str, int] = {}
        if pairs is not None:
            for key, value in pairs:
                self[key] = value

    @classmethod
    def from_pairs(cls, pairs: List[Tuple[str, Any]]) -> "OrderedObject":
        """Build from parser output, collapsing duplicate keys in one pass."""
        obj = cls()
        for key, value in pairs:
            obj[key] = value
        return obj

    def _index(self, key: str) -> int:
        return self._positions.get(key, -1)

    def __getitem__(self, key: str) -> Any:
        idx = self._index(key)
        if idx < 0:
            raise KeyError(key)
        return self._pairs[idx][1]

    def __setitem__(self, key: str, value: Any) -> None:
        idx = self._index(key)
        if idx < 0:
            self._positions[key] = len(self._pairs)
            self._pairs.append((key, value))
        else:
            self._pairs[idx] = (key, value)

    def __delitem__(self, key: str) -> None:
        idx = self._index(key)
        if idx < 0:
            raise KeyError(key)
        del self._pairs[idx]
        del self._positions[key]
        for pos in range(idx, len(self._pairs)):
            self._positions[self._pairs[pos][0]] = pos

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._index(key) >= 0

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedObject):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"OrderedObject({self._pairs!r})"

    def get(self, key: str, default: Any = None) -> Any:
        idx = self._index(key)
        return default if idx < 0 else self._pairs[idx][1]

    def keys(self) -> List[str]:
        return [k for k, _ in self._pairs]

    def values(self) -> List[Any]:
        return [v for _, v in self._pairs]

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._pairs)

    def copy(self) -> "OrderedObject":
        """Shallow copy (nested values are shared)."""
        obj = OrderedObject()
        obj._pairs = list(self._pairs)
        obj._positions = dict(self._positions)
        return obj


OrderedValue = Union[None, bool, Number, str, List[Any], OrderedObject]


def to_ordered(obj: Any) -> OrderedValue:
    """
    Convert plain Python data into the ordered value model.

    dict insertion order becomes key order. Tuples become lists.

    Raises:
        TypeError: If obj contains a type with no JSON counterpart
        ValueError: If obj contains a non-finite float
    """
    if obj is None or isinstance(obj, (bool, str, Number)):
        return obj
    if isinstance(obj, (int, float)):
        return Number.from_value(obj)
    if isinstance(obj, OrderedObject):
        return OrderedObject((k, to_ordered(v)) for k, v in obj.items())
    if isinstance(obj, dict):
        for key in obj:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be str, got {type(key).__name__}")
        return OrderedObject((k, to_ordered(v)) for k, v in obj.items())
    if isinstance(obj, (list, tuple)):
        return [to_ordered(x) for x in obj]
    raise TypeError(f"unsupported type in message: {type(obj).__name__}")


def to_python(value: OrderedValue) -> Any:
    """Convert an ordered value back to plain dict/list/int/float data."""
    if isinstance(value, OrderedObject):
        return {k: to_python(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_python(x) for x in value]
    if isinstance(value, Number):
        return value.to_python()
    return value
