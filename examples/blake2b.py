"""
Simple BLAKE2b usage: plain digest, keyed digest (MAC), truncated digest.

Run from repo root: PYTHONPATH=src python examples/blake2b.py
"""

import os
import sys

if getattr(sys, "frozen", False) is False:
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    _src = os.path.join(_root, "src")
    if _src not in sys.path:
        sys.path.insert(0, _src)

from picoblake import blake2b, blake2b_hex

# Unkeyed BLAKE2b-512
print("blake2b(b'abc')            =", blake2b_hex(b"abc"))

# Keyed: integrity tag for a payload, 32-byte output
key = b"0123456789abcdef0123456789abcdef"
tag = blake2b(b"file contents", key, 32)
print("blake2b(payload, key, 32)  =", tag.hex())

# Short digest, e.g. for a file-name fingerprint
print("blake2b(b'notes.txt', 8)   =", blake2b_hex(b"notes.txt", digest_size=8))

# Strict mode rejects what the default mode would clamp
try:
    blake2b(b"abc", digest_size=65, strict=True)
except ValueError as exc:
    print("strict mode:", exc)
