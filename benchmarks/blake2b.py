"""
Benchmark BLAKE2b: picoblake (pure Python or cythonized) vs hashlib (C reference).
Compares time per call and peak memory (tracemalloc) per run.

Run from repo root:

  PYTHONPATH=src python benchmarks/blake2b.py

Or after pip install -e .:

  python benchmarks/blake2b.py
"""

from __future__ import annotations

import hashlib
import os
import sys
import time
import tracemalloc

# Prefer repo src on path so we use local code
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_src = os.path.join(_root, "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from picoblake.hashes import _blake2b
from picoblake.hashes import blake2b

# Sample payloads (bytes); kept small so benchmark stays fast
SAMPLES = [
    (b"", "empty"),
    (b"hello", "short"),
    (b"x" * 128, "128 B"),
    (b"x" * 1024, "1 KiB"),
    (b"x" * 8192, "8 KiB"),
]


def _hashlib_blake2b(data: bytes) -> bytes:
    return hashlib.blake2b(data).digest()


def _n_time(data_len: int) -> int:
    if data_len <= 128:
        return 500
    if data_len <= 1024:
        return 100
    return 20


def _n_mem(data_len: int) -> int:
    return max(10, _n_time(data_len) // 5)


def _time_per_call(fn, data: bytes, n: int, warmup: int = 5) -> float:
    for _ in range(warmup):
        fn(data)
    start = time.perf_counter()
    for _ in range(n):
        fn(data)
    return (time.perf_counter() - start) / n


def _peak_memory_kb(fn, data: bytes, n: int) -> float:
    """Peak traced memory (KiB) during n calls. Resets peak before run if available."""
    tracemalloc.start()
    if hasattr(tracemalloc, "reset_peak"):
        tracemalloc.reset_peak()
    for _ in range(n):
        fn(data)
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return peak / 1024.0


def main() -> None:
    compiled = not _blake2b.__file__.endswith(".py")
    print("Benchmark: BLAKE2b-512  picoblake vs hashlib")
    print(f"  (picoblake is {'cythonized' if compiled else 'pure Python'})")
    print()

    # Sanity: same digest
    msg = b"test"
    a = blake2b(msg)
    b = _hashlib_blake2b(msg)
    assert a == b, f"digest mismatch: {a.hex()} vs {b.hex()}"
    print(f"  Sanity check: both give {a.hex()[:32]}...")
    print()

    print("  --- Time per call (ms) ---")
    print(
        f"  {'size':<10} {'n':<8} {'picoblake':<14} {'hashlib':<14} {'slowdown':<10}"
    )
    print("  " + "-" * 58)
    for data, label in SAMPLES:
        n = _n_time(len(data))
        t_py = _time_per_call(blake2b, data, n=n) * 1000
        t_c = _time_per_call(_hashlib_blake2b, data, n=n) * 1000
        slowdown = t_py / t_c if t_c > 0 else 0
        print(f"  {label:<10} {n:<8} {t_py:<14.4f} {t_c:<14.4f} {slowdown:.0f}x")
    print()

    print("  --- Peak memory (KiB) during run ---")
    print(f"  {'size':<10} {'n':<8} {'picoblake':<14} {'hashlib':<14}")
    print("  " + "-" * 48)
    for data, label in SAMPLES:
        n = _n_mem(len(data))
        mem_py = _peak_memory_kb(blake2b, data, n=n)
        mem_c = _peak_memory_kb(_hashlib_blake2b, data, n=n)
        print(f"  {label:<10} {n:<8} {mem_py:<14.2f} {mem_c:<14.2f}")
    print()


if __name__ == "__main__":
    main()
