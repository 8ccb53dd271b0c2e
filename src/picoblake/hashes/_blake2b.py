"""
BLAKE2b (RFC 7693), sequential single-instance mode. Pure Python; cythonized by setup.py.

Keyed or unkeyed, digest length 1..64 bytes. No salt, personalization, tree
mode or incremental updates: the whole message is hashed in one call.
"""

from __future__ import annotations

import logging
from typing import Union

_log = logging.getLogger(__name__)

_BytesLike = Union[bytes, bytearray, memoryview]

_MASK64 = 0xFFFFFFFFFFFFFFFF

_BLOCK_BYTES = 128
_WORD_BYTES = 8
_BLOCK_WORDS = _BLOCK_BYTES // _WORD_BYTES  # 16
_ROUNDS = 12

KEY_SIZE_MAX = 64
DIGEST_SIZE_MAX = 64

_IV = [
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
]

# (r1, r2) for the x half of G, then for the y half
_ROTATION = [32, 24, 16, 63]

_SIGMA = [
    [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15],
    [14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3],
    [11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4],
    [7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8],
    [9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13],
    [2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9],
    [12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11],
    [13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10],
    [6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5],
    [10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0],
]

# Working vector seen as a 4x4 matrix: four columns, then four diagonals
_COLUMNS = [(col, col + 4, col + 8, col + 12) for col in range(4)]
_DIAGONALS = [
    tuple(row * 4 + (col + row) % 4 for row in range(4)) for col in range(4)
]
_QUADS = _COLUMNS + _DIAGONALS


def _rotr64(v: int, n: int) -> int:
    """Rotate 64-bit value v right by n bits (0 < n < 64)."""
    return ((v >> n) | (v << (64 - n))) & _MASK64


def _ceil_div(n: int, d: int) -> int:
    return (n + d - 1) // d


def _bytes_to_word(chunk: bytes) -> int:
    """Little-endian word from at most 8 bytes; a short chunk reads as zero padded."""
    return int.from_bytes(chunk, "little")


def _words_to_bytes(words: list[int]) -> bytes:
    return b"".join(w.to_bytes(_WORD_BYTES, "little") for w in words)


def _param_word(kk: int, nn: int) -> int:
    """Parameter block word 0: depth 1, fanout 1, key length kk, digest length nn."""
    return 0x01010000 ^ (kk << 8) ^ nn


def _mix(v: list[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    """G: mix message words x and y into v[a], v[b], v[c], v[d] (in place)."""
    for m, r1, r2 in (
        (x, _ROTATION[0], _ROTATION[1]),
        (y, _ROTATION[2], _ROTATION[3]),
    ):
        v[a] = (v[a] + v[b] + m) & _MASK64
        v[d] = _rotr64(v[d] ^ v[a], r1)
        v[c] = (v[c] + v[d]) & _MASK64
        v[b] = _rotr64(v[b] ^ v[c], r2)


def _compress(h: list[int], block: list[int], t: int, last: bool) -> None:
    """F: fold one 16-word block into the 8-word state h (in place).

    t is the byte counter (up to 128 bits); last marks the final block.
    """
    v = h[:] + _IV[:]
    v[12] ^= t & _MASK64
    v[13] ^= (t >> 64) & _MASK64
    if last:
        v[14] ^= _MASK64
    for i in range(_ROUNDS):
        s = _SIGMA[i % 10]
        for j in range(8):
            a, b, c, d = _QUADS[j]
            _mix(v, a, b, c, d, block[s[2 * j]], block[s[2 * j + 1]])
    for i in range(8):
        h[i] ^= v[i] ^ v[i + 8]


def _blocks(message: bytes, key: bytes) -> list[list[int]]:
    """Zero-padded 16-word blocks; a non-empty key takes the whole of block 0."""
    kk = len(key)
    dd = max(1, _ceil_div(kk, _BLOCK_BYTES) + _ceil_div(len(message), _BLOCK_BYTES))
    blocks = [[0] * _BLOCK_WORDS for _ in range(dd)]
    for off in range(0, kk, _WORD_BYTES):
        blocks[0][off // _WORD_BYTES] = _bytes_to_word(key[off : off + _WORD_BYTES])
    first = 1 if kk > 0 else 0
    for n, off in enumerate(range(0, len(message), _WORD_BYTES)):
        blocks[first + n // _BLOCK_WORDS][n % _BLOCK_WORDS] = _bytes_to_word(
            message[off : off + _WORD_BYTES]
        )
    return blocks


def _check_params(key_len: int, digest_size: int) -> None:
    if key_len > KEY_SIZE_MAX:
        raise ValueError(f"key must be at most {KEY_SIZE_MAX} bytes")
    if not (1 <= digest_size <= DIGEST_SIZE_MAX):
        raise ValueError(f"digest_size must be in range 1..{DIGEST_SIZE_MAX}")


def _state(message: bytes, key: bytes, nn: int) -> list[int]:
    """Final 8-word state for an already clamped key (<= 64 bytes) and nn."""
    kk = len(key)
    blocks = _blocks(message, key)
    h = _IV[:]
    h[0] ^= _param_word(kk, nn)
    n_blocks = len(blocks)
    for i in range(n_blocks - 1):
        _compress(h, blocks[i], (i + 1) * _BLOCK_BYTES, False)
    # total bytes absorbed, counting the key block
    t = len(message) + (_BLOCK_BYTES if kk > 0 else 0)
    _compress(h, blocks[n_blocks - 1], t, True)
    return h


def blake2b(
    message: _BytesLike,
    key: _BytesLike = b"",
    digest_size: int = DIGEST_SIZE_MAX,
    *,
    strict: bool = False,
) -> bytes:
    """
    BLAKE2b digest of message, optionally keyed (MAC mode).

    By default out-of-range parameters are clamped rather than rejected: a key
    longer than 64 bytes is cut to its first 64 bytes, a digest_size above 64
    becomes 64 and a digest_size below 1 gives an empty digest.

    Args:
        message: Input bytes (any length); bytearray and memoryview are copied to bytes.
        key: Secret key, 0..64 bytes (b"" for unkeyed hashing).
        digest_size: Output length in bytes, 1..64.
        strict: Raise ValueError instead of clamping.

    Returns:
        Digest of exactly min(max(digest_size, 0), 64) bytes.
    """
    message = bytes(message)
    key = bytes(key)
    if strict:
        _check_params(len(key), digest_size)
    kk = min(len(key), KEY_SIZE_MAX)
    nn = min(max(digest_size, 0), DIGEST_SIZE_MAX)
    if kk != len(key):
        _log.debug("key of %d bytes clamped to %d", len(key), kk)
    if nn != digest_size:
        _log.debug("digest_size %d clamped to %d", digest_size, nn)
    h = _state(message, key[:kk], nn)
    return _words_to_bytes(h)[:nn]


def blake2b_hex(
    message: _BytesLike,
    key: _BytesLike = b"",
    digest_size: int = DIGEST_SIZE_MAX,
    *,
    strict: bool = False,
) -> str:
    """Hex string of blake2b(message, key, digest_size)."""
    return blake2b(message, key, digest_size, strict=strict).hex()


__all__: tuple[str, ...] = (
    "DIGEST_SIZE_MAX",
    "KEY_SIZE_MAX",
    "blake2b",
    "blake2b_hex",
)
