"""Serialization of host values to JSON text."""

import decimal
import math
from collections.abc import Mapping
from operator import itemgetter
from typing import Any

from ._classifier import ContainerKind
from ._classifier import classify
from ._config import EncodeConfig
from ._errors import CyclicReferenceError
from ._errors import EncodeError
from ._errors import NestingDepthError
from ._errors import UnsupportedNumberError
from ._profile import ProfileContext
from ._values import Number
from ._values import is_opaque

_ASCII_LIMIT = 127
_BMP_LIMIT = 0xFFFF

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
for _code in range(0x20):
    _ESCAPES.setdefault(chr(_code), f"\\u{_code:04x}")

_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def _ascii_escape(char: str) -> str:
    code = ord(char)
    if code <= _BMP_LIMIT:
        return f"\\u{code:04x}"
    code -= 0x10000
    high = 0xD800 | (code >> 10)
    low = 0xDC00 | (code & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"


def _encode_string(s: str, config: EncodeConfig) -> str:
    """Encode string with proper escape sequences."""
    with ProfileContext("encode_string", len(s)):
        result = ['"']
        for char in s:
            escaped = _ESCAPES.get(char)
            if escaped is not None:
                result.append(escaped)
            elif config.escape_html and char in _HTML_ESCAPES:
                result.append(_HTML_ESCAPES[char])
            elif config.ensure_ascii and ord(char) > _ASCII_LIMIT:
                result.append(_ascii_escape(char))
            else:
                result.append(char)
        result.append('"')
        return "".join(result)


def _encode_number(n: int | float | decimal.Decimal) -> str:
    """Encode numeric values with JSON compliance."""
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            raise UnsupportedNumberError(n)
        return float.__repr__(n)
    if isinstance(n, decimal.Decimal):
        if not n.is_finite():
            raise UnsupportedNumberError(n)
        return str(n)
    try:
        return int.__repr__(n)
    except ValueError as e:
        # Past the interpreter's int string conversion limit
        raise UnsupportedNumberError(
            n, f"Integer too large to encode ({n.bit_length()} bits)"
        ) from e


class JsonEncoder:
    """
    Depth-first walker turning one value graph into JSON text.

    An encoder instance serves a single call: ``_visiting`` holds the
    identities of the containers on the current descent path.
    """

    def __init__(self, config: EncodeConfig):
        self.config = config
        self._visiting: set[int] = set()
        if isinstance(config.indent, int):
            self._indent_unit = " " * config.indent
        else:
            self._indent_unit = config.indent or ""

    def encode(self, value: Any, depth: int = 0) -> str:  # noqa: PLR0911
        """Encodes ``value``; ``depth`` counts the enclosing containers."""
        if value is None:
            return "null"
        if value is True:
            return "true"
        if value is False:
            return "false"
        if isinstance(value, Number):
            return str.__str__(value)
        if isinstance(value, str):
            return _encode_string(value, self.config)
        if isinstance(value, int | float | decimal.Decimal):
            return _encode_number(value)
        if isinstance(value, Mapping | list | tuple):
            return self._encode_container(value, depth)
        # Opaque values are absent
        return "null"

    def _encode_container(
        self,
        container: Mapping[Any, Any] | list[Any] | tuple[Any, ...],
        depth: int,
    ) -> str:
        if depth >= self.config.max_depth:
            raise NestingDepthError(self.config.max_depth)

        ident = id(container)
        if ident in self._visiting:
            raise CyclicReferenceError()

        shape = classify(container, self.config.sparse_arrays)

        self._visiting.add(ident)
        try:
            if shape.kind is ContainerKind.ARRAY:
                return self._encode_array(shape.items, depth + 1)
            return self._encode_object(shape.items, depth + 1)
        finally:
            self._visiting.discard(ident)

    def _encode_array(self, values: tuple[Any, ...], depth: int) -> str:
        with ProfileContext("encode_array", len(values)):
            chunks = []
            for index, item in enumerate(values, start=1):
                try:
                    chunks.append(self.encode(item, depth))
                except EncodeError as exc:
                    exc.add_note(f"while encoding index {index}")
                    raise
            return self._join("[", chunks, "]", depth)

    def _encode_object(
        self, pairs: tuple[tuple[str, Any], ...], depth: int
    ) -> str:
        with ProfileContext("encode_object", len(pairs)):
            if self.config.sort_keys:
                pairs = tuple(sorted(pairs, key=itemgetter(0)))

            key_separator = self.config.key_separator
            chunks = []
            for key, value in pairs:
                if is_opaque(value):
                    continue
                try:
                    encoded_value = self.encode(value, depth)
                except EncodeError as exc:
                    exc.add_note(f"while encoding key {key!r}")
                    raise
                encoded_key = _encode_string(key, self.config)
                chunks.append(f"{encoded_key}{key_separator}{encoded_value}")
            return self._join("{", chunks, "}", depth)

    def _join(
        self, open_: str, chunks: list[str], close: str, depth: int
    ) -> str:
        """Joins encoded members, indenting them by ``depth`` levels."""
        if not chunks:
            return open_ + close

        separator = self.config.item_separator
        if self.config.indent is None:
            return open_ + separator.join(chunks) + close

        inner = "\n" + self._indent_unit * depth
        outer = "\n" + self._indent_unit * (depth - 1)
        body = (separator + inner).join(chunks)
        return open_ + inner + body + outer + close


def encode_value(value: Any, config: EncodeConfig) -> str:
    """Encodes ``value`` as JSON text or raises an ``EncodeError``."""
    return JsonEncoder(config).encode(value)
