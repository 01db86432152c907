"""
Array-versus-object classification of containers.

Tables carry no array or object tag of their own, so the decision is made
once per container, from its keys, before any of its values are encoded:

* empty -> array
* only non-negative integer keys -> array of the contiguous prefix 1..k,
  where an opaque value counts as a missing index
* only string keys -> object
* anything else -> InvalidKeyTypeError
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._config import SparsePolicy
from ._errors import InvalidKeyTypeError
from ._errors import SparseArrayError
from ._values import is_opaque


class ContainerKind(Enum):
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class Classification:
    """
    Outcome of classifying one container.

    ``items`` holds values in index order for arrays and ``(key, value)``
    pairs in iteration order for objects.
    """

    kind: ContainerKind
    items: tuple[Any, ...]


def _index_key(key: Any) -> int | str | None:
    """Narrows a table key to the int/str variant, None when invalid."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, float) and key.is_integer():
        return int(key)
    if isinstance(key, str):
        return key
    return None


def _array_prefix(
    indices: Mapping[int, Any], sparse_arrays: SparsePolicy
) -> Classification:
    # An opaque value leaves its index empty, so it ends the prefix too
    border = 0
    while border + 1 in indices and not is_opaque(indices[border + 1]):
        border += 1

    if sparse_arrays == "error":
        present = [i for i, v in indices.items() if not is_opaque(v)]
        if border != len(present):
            raise SparseArrayError(border, max(present))

    return Classification(
        ContainerKind.ARRAY,
        tuple(indices[index] for index in range(1, border + 1)),
    )


def classify(
    container: Mapping[Any, Any] | list[Any] | tuple[Any, ...],
    sparse_arrays: SparsePolicy = "truncate",
) -> Classification:
    """Classifies ``container`` as a JSON array or object."""
    if isinstance(container, list | tuple):
        return _array_prefix(
            dict(enumerate(container, start=1)), sparse_arrays
        )

    if not container:
        return Classification(ContainerKind.ARRAY, ())

    indices: dict[int, Any] = {}
    pairs: list[tuple[str, Any]] = []

    for key, value in container.items():
        normalized = _index_key(key)
        if isinstance(normalized, int) and normalized >= 0 and not pairs:
            indices[normalized] = value
        elif isinstance(normalized, str) and not indices:
            pairs.append((normalized, value))
        else:
            raise InvalidKeyTypeError()

    if pairs:
        return Classification(ContainerKind.OBJECT, tuple(pairs))

    return _array_prefix(indices, sparse_arrays)
