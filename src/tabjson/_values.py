"""
Host value model: tables, exact numeric literals and the opaque marker.

Tables have no inherent array or object tag. Whether a table encodes as a
JSON array or object is decided from its key set at encode time.
"""

import decimal
import math
import re
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableMapping
from typing import Any

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")


class _BoolKey:
    """Stands in for a boolean key so it cannot merge with 1 or 0."""

    __slots__ = ("value",)

    def __init__(self, value: bool) -> None:
        self.value = value

    def __repr__(self) -> str:
        return repr(self.value)


_BOOL_KEYS = {True: _BoolKey(True), False: _BoolKey(False)}


def _table_key(key: Any) -> Any:
    if key is None:
        raise TypeError("table index is nil")
    if isinstance(key, bool):
        return _BOOL_KEYS[key]
    if isinstance(key, float):
        if math.isnan(key):
            raise TypeError("table index is NaN")
        if key.is_integer():
            return int(key)
    return key


class Table(MutableMapping[Any, Any]):
    """
    Ordered mapping shared by reference, indexed like a script table.

    Looking up a missing key yields ``None``: absence and null are the same
    host value. ``None`` can still be stored explicitly, which keeps the key
    present. Integral float keys collapse onto their integer counterpart.
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        fields: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        self._fields: dict[Any, Any] = {}
        if fields is not None:
            self.update(fields)
        if kwargs:
            self.update(kwargs)

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> "Table":
        """Builds a table holding ``values`` at keys ``1..n``."""
        table = cls()
        for index, value in enumerate(values, start=1):
            table._fields[index] = value
        return table

    def __getitem__(self, key: Any) -> Any:
        return self._fields.get(_table_key(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._fields[_table_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        del self._fields[_table_key(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return _table_key(key) in self._fields
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        for key in self._fields:
            yield key.value if isinstance(key, _BoolKey) else key

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Table):
            # Boolean keys stay apart from 1 and 0 here as well
            return self._fields == other._fields
        return super().__eq__(other)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self._fields.items())
        return f"Table({{{pairs}}})"

    def get(self, key: Any, default: Any = None) -> Any:
        try:
            return self._fields.get(_table_key(key), default)
        except TypeError:
            return default

    def setdefault(self, key: Any, default: Any = None) -> Any:
        return self._fields.setdefault(_table_key(key), default)

    def border(self) -> int:
        """Returns the largest ``k`` such that keys ``1..k`` are present."""
        k = 0
        while k + 1 in self._fields:
            k += 1
        return k

    def append(self, value: Any) -> None:
        self._fields[self.border() + 1] = value


class Number(str):
    """
    An exact JSON numeric literal.

    Produced by the decoder in ``use_number`` mode so values beyond float
    precision survive a round trip. Conversions happen only on request.
    """

    __slots__ = ()

    def __new__(cls, literal: str) -> "Number":
        if not isinstance(literal, str):
            raise TypeError(
                f"Number literal must be str, not {type(literal).__name__}"
            )
        if _NUMBER_RE.fullmatch(literal) is None:
            raise ValueError(f"invalid JSON number literal: {literal!r}")
        return super().__new__(cls, literal)

    def __repr__(self) -> str:
        return f"Number({str.__repr__(self)})"

    @property
    def is_integer(self) -> bool:
        """True when the literal has neither a fraction nor an exponent."""
        match = _NUMBER_RE.fullmatch(self)
        assert match is not None
        return match.group(1) is None and match.group(2) is None

    def to_decimal(self) -> decimal.Decimal:
        return decimal.Decimal(str.__str__(self))

    def to_int(self) -> int:
        if self.is_integer:
            return int(str.__str__(self))
        value = self.to_decimal()
        if value != value.to_integral_value():
            raise ValueError(f"{str.__str__(self)} is not an integer")
        return int(value)

    def to_float(self) -> float:
        return float(str.__str__(self))

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()


def is_opaque(value: Any) -> bool:
    """Tells whether ``value`` has no JSON representation at all."""
    return not (
        value is None
        or isinstance(
            value,
            str | int | float | decimal.Decimal | Mapping | list | tuple,
        )
    )


def decode_value(value: Any) -> Any:
    """
    Converts already-parsed native data into host values.

    Dicts become tables keyed by their strings, lists and tuples become
    tables keyed ``1..n``, and exact ``Number`` literals become plain
    strings holding the literal.
    """
    if isinstance(value, Number):
        return str.__str__(value)
    if isinstance(value, dict):
        return Table((key, decode_value(item)) for key, item in value.items())
    if isinstance(value, list | tuple):
        return Table.from_sequence(decode_value(item) for item in value)
    return value
