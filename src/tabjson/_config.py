"""Immutable option sets for encoding and decoding."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing import Literal

# Keeps encoder and decoder recursion well inside the interpreter's limit
DEFAULT_MAX_DEPTH = int(os.environ.get("TABJSON_MAX_DEPTH", "200"))

SparsePolicy = Literal["truncate", "error"]
SPARSE_POLICIES: tuple[SparsePolicy, ...] = ("truncate", "error")

ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None
ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None


def _check_depth(max_depth: object) -> None:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise TypeError("max_depth must be an integer")
    if max_depth < 1:
        raise ValueError("max_depth must be positive")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    ``use_number`` keeps every numeric literal as an exact ``Number``
    instead of converting it; the ``parse_*`` hooks take precedence over it.
    """

    use_number: bool = False
    parse_int: ParseIntHook = None
    parse_float: ParseFloatHook = None
    object_pairs_hook: ObjectPairsHook = None
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.use_number, bool):
            raise TypeError("use_number must be a boolean")
        _check_depth(self.max_depth)


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    Output is compact by default. ``sparse_arrays`` selects what happens to
    integer-keyed tables with gaps: ``"truncate"`` keeps the contiguous
    prefix starting at index 1, ``"error"`` rejects the table.
    """

    ensure_ascii: bool = False
    escape_html: bool = False
    sort_keys: bool = False
    indent: str | int | None = None
    separators: tuple[str, str] | None = None
    sparse_arrays: SparsePolicy = "truncate"
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if not isinstance(self.escape_html, bool):
            raise TypeError("escape_html must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if self.indent is not None and (
            isinstance(self.indent, bool)
            or not isinstance(self.indent, int | str)
        ):
            raise TypeError("indent must be an int, a string or None")
        if self.separators is not None and len(self.separators) != 2:  # noqa: PLR2004
            raise ValueError("separators must be an (item, key) pair")
        if self.sparse_arrays not in SPARSE_POLICIES:
            raise ValueError(
                f"sparse_arrays must be one of {SPARSE_POLICIES!r}"
            )
        _check_depth(self.max_depth)

    @property
    def item_separator(self) -> str:
        if self.separators is not None:
            return self.separators[0]
        return ","

    @property
    def key_separator(self) -> str:
        if self.separators is not None:
            return self.separators[1]
        return ":" if self.indent is None else ": "
