"""Hash functions: BLAKE2b."""

from ._blake2b import DIGEST_SIZE_MAX, KEY_SIZE_MAX, blake2b, blake2b_hex

__all__: tuple[str, ...] = (
    "DIGEST_SIZE_MAX",
    "KEY_SIZE_MAX",
    "blake2b",
    "blake2b_hex",
)
