"""
Benchmark suite for tabjson encoding and decoding performance.

Compares tabjson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
"""
