"""
BLAKE2b (RFC 7693) from scratch: keyed or unkeyed, digest length 1..64 bytes.
Pure Python; the hash module is cythonized at build time when a compiler is available.
"""

from .__about__ import __version__
from .hashes import DIGEST_SIZE_MAX, KEY_SIZE_MAX, blake2b, blake2b_hex

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Hashes
    "blake2b",
    "blake2b_hex",
    # Limits
    "DIGEST_SIZE_MAX",
    "KEY_SIZE_MAX",
)
