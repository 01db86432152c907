"""
JSON encoding and decoding for table-based script values.

Tables carry no array/object tag, so the encoder classifies each one from
its key set: dense integer keys become arrays, string keys become objects,
and anything else is an error. The decoder builds tables back, arrays keyed
``1..n`` and objects keyed by their member names.

Two surfaces are provided: ``encode``/``decode`` return ``(result, error)``
pairs for script hosts, while ``dumps``/``loads``/``dump``/``load`` raise
typed exceptions.
"""

import logging
from typing import IO
from typing import Any

from ._classifier import Classification
from ._classifier import ContainerKind
from ._classifier import classify
from ._config import DEFAULT_MAX_DEPTH
from ._config import EncodeConfig
from ._config import ParseConfig
from ._decoder import JsonLexer
from ._decoder import JsonParser
from ._decoder import JsonToken
from ._decoder import TokenKind
from ._decoder import decode_document
from ._encoder import JsonEncoder
from ._encoder import encode_value
from ._errors import CyclicReferenceError
from ._errors import EncodeError
from ._errors import InvalidKeyTypeError
from ._errors import JSONDecodeError
from ._errors import NestingDepthError
from ._errors import SparseArrayError
from ._errors import UnsupportedNumberError
from ._module import MODULE_NAME
from ._module import ModuleRegistry
from ._module import loader
from ._module import preload
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._values import Number
from ._values import Table
from ._values import decode_value
from ._values import is_opaque

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def loads(s: str, **kwargs: Any) -> Any:
    """
    Parses JSON text into host values with strict standards compliance.

    Validates input type and delegates to parser with immutable configuration.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return decode_document(s, config)


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Serializes host values to JSON text.

    Raises an ``EncodeError`` subclass for tables that cannot be expressed
    in JSON; nothing is returned in that case.
    """
    config = EncodeConfig(**kwargs)
    return encode_value(obj, config)


def load(fp: IO[str], **kwargs: Any) -> Any:
    """
    Parses JSON from file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes host values to a JSON file.

    The text is fully encoded before anything is written.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


def encode(value: Any, **kwargs: Any) -> tuple[str, None] | tuple[None, str]:
    """
    Script-facing encoder: returns ``(text, None)`` or ``(None, message)``.
    """
    try:
        return dumps(value, **kwargs), None
    except EncodeError as e:
        logger.debug("encode failed: %s", e)
        return None, str(e)


def decode(text: str, **kwargs: Any) -> tuple[Any, None] | tuple[None, str]:
    """
    Script-facing decoder: returns ``(value, None)`` or ``(None, message)``.

    ``decode("null")`` yields ``(None, None)``; only the second element
    tells success from failure.
    """
    try:
        return loads(text, **kwargs), None
    except JSONDecodeError as e:
        logger.debug("decode failed: %s", e)
        return None, str(e)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MODULE_NAME",
    "Classification",
    "ContainerKind",
    "CyclicReferenceError",
    "EncodeConfig",
    "EncodeError",
    "HotPathStats",
    "InvalidKeyTypeError",
    "JSONDecodeError",
    "JsonEncoder",
    "JsonLexer",
    "JsonParser",
    "JsonToken",
    "ModuleRegistry",
    "NestingDepthError",
    "Number",
    "ParseConfig",
    "SparseArrayError",
    "Table",
    "TokenKind",
    "UnsupportedNumberError",
    "classify",
    "clear_hot_path_stats",
    "decode",
    "decode_value",
    "dump",
    "dumps",
    "encode",
    "get_hot_path_stats",
    "is_opaque",
    "load",
    "loader",
    "loads",
    "preload",
]
