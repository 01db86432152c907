"""
Encoding and decoding benchmarks comparing tabjson against other libraries.

Decoding compares like for like on JSON text. Encoding feeds the reference
libraries native dicts and lists and tabjson the equivalent tables, which
is what a script host would pass in.
- Standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
- tabjson (this package)
"""

import json
from collections.abc import Callable
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import tabjson
from benchmarks.data_generators import generate_test_data
from benchmarks.data_generators import generate_test_table
from benchmarks.data_generators import generate_test_value

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]

DECODERS: list[tuple[str, Callable[[Any], Any]]] = [
    ("stdlib_json", json.loads),
    ("orjson", orjson.loads),
    ("ujson", ujson.loads),
    ("tabjson", tabjson.loads),
]

ENCODERS: list[tuple[str, Callable[[Any], Any]]] = [
    ("stdlib_json", json.dumps),
    ("orjson", orjson.dumps),
    ("ujson", ujson.dumps),
    ("tabjson", tabjson.dumps),
]


class TestDecodingBenchmarks:
    """Benchmarks for JSON decoding across libraries and payload shapes."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("parser,parse_func", DECODERS)
    def test_decoding(
        self,
        benchmark: Any,
        data_type: str,
        parser: str,
        parse_func: Callable[[Any], Any],
    ) -> None:
        benchmark.group = f"decode_{data_type}"
        test_data = generate_test_data(data_type)

        if parser == "orjson":
            # orjson expects bytes for optimal performance
            result = benchmark(parse_func, test_data.encode("utf-8"))
        else:
            result = benchmark(parse_func, test_data)

        if parser == "tabjson":
            assert tabjson.decode_value(json.loads(test_data)) == result
        else:
            assert result == json.loads(test_data)

    def test_number_mode_decoding(self, benchmark: Any) -> None:
        """Benchmarks exact-literal decoding of a mixed array."""
        benchmark.group = "decode_numbers"
        test_data = generate_test_data("mixed_array")

        result = benchmark(tabjson.loads, test_data, use_number=True)

        assert isinstance(result, tabjson.Table)


class TestEncodingBenchmarks:
    """Benchmarks for JSON encoding across libraries and payload shapes."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("encoder,encode_func", ENCODERS)
    def test_encoding(
        self,
        benchmark: Any,
        data_type: str,
        encoder: str,
        encode_func: Callable[[Any], Any],
    ) -> None:
        benchmark.group = f"encode_{data_type}"
        if encoder == "tabjson":
            value: Any = generate_test_table(data_type)
        else:
            value = generate_test_value(data_type)

        result = benchmark(encode_func, value)

        assert json.loads(result) is not None
