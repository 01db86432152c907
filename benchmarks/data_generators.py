"""
Test data generators for JSON encoding and decoding benchmarks.

Builds the same payloads in three forms:
- JSON text, for decoder benchmarks
- native dicts and lists, for the reference libraries' encoders
- tables, as a script host hands them to the tabjson encoder
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

import tabjson

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3


def generate_test_value(data_type: str) -> Any:
    """Generates native test data based on specified type."""
    generators: dict[str, Callable[[], Any]] = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def generate_test_data(data_type: str) -> str:
    """Generates JSON text based on specified type."""
    return json.dumps(generate_test_value(data_type))


def generate_test_table(data_type: str) -> tabjson.Table:
    """Generates the payload as tables keyed the way scripts build them."""
    table = tabjson.decode_value(generate_test_value(data_type))
    assert isinstance(table, tabjson.Table)
    return table


def _generate_small_object() -> dict[str, Any]:
    """A script's config record (< 1KB)."""
    return {
        "id": 12345,
        "name": "spawn_point",
        "enabled": True,
        "weight": 0.75,
        "tags": ["npc", "village"],
        "position": {"x": 120.5, "y": -33.25, "z": 8.0},
    }


def _generate_large_object() -> dict[str, Any]:
    """A save-game style state dump (> 10KB)."""
    return {
        "player": {
            "name": _random_string(12),
            "level": random.randint(1, 99),
            "stats": {
                stat: random.randint(1, 20)
                for stat in ("str", "dex", "con", "int", "wis", "cha")
            },
        },
        "inventory": [
            {
                "slot": slot,
                "item": f"item_{random.randint(1, 500):03d}",
                "count": random.randint(1, 64),
                "durability": round(random.uniform(0.0, 1.0), 3),
                "enchanted": random.choice([True, False]),
            }
            for slot in range(1, 81)
        ],
        "quests": {
            f"quest_{i}": {
                "stage": random.randint(0, 10),
                "log": [_random_string(24) for _ in range(3)],
            }
            for i in range(40)
        },
    }


def _generate_mixed_array() -> list[Any]:
    """A large array with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append({"index": i, "value": _random_string(10)})

    return array


def _generate_nested_structure() -> dict[str, Any]:
    """A scene graph eight levels deep."""

    def node(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"mesh": _random_string(10)}

        return {
            "depth": depth,
            "name": _random_string(15),
            "children": [node(depth - 1) for _ in range(3)],
            "transform": node(depth - 1),
        }

    return node(8)


def _generate_string_heavy() -> dict[str, Any]:
    """Dialogue lines full of characters that need escaping."""

    def line() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice('"\\/\b\f\n\r\té中'))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "lines": [line() for _ in range(100)],
        "speakers": {f"npc_{i}": line() for i in range(20)},
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
