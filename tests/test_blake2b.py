"""BLAKE2b: RFC 7693 known answers, agreement with hashlib, parameter handling."""

from __future__ import annotations

import hashlib
from concurrent.futures import ThreadPoolExecutor

import pytest

from picoblake import DIGEST_SIZE_MAX, KEY_SIZE_MAX, blake2b, blake2b_hex

# RFC 7693 / reference BLAKE2b-512 vectors
BLAKE2B_512_EMPTY = bytes.fromhex(
    "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
    "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce"
)
BLAKE2B_512_ABC = bytes.fromhex(
    "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
    "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
)

KEY_64 = bytes(range(64))

MESSAGE_LENGTHS = [0, 1, 7, 8, 9, 127, 128, 129, 255, 256, 257, 1000]
KEY_LENGTHS = [0, 1, 16, 32, 63, 64]


def _message(n: int) -> bytes:
    return bytes(i % 251 for i in range(n))


def test_blake2b_empty() -> None:
    assert blake2b(b"") == BLAKE2B_512_EMPTY


def test_blake2b_abc() -> None:
    assert blake2b(b"abc") == BLAKE2B_512_ABC


def test_blake2b_hex_abc() -> None:
    assert blake2b_hex(b"abc") == BLAKE2B_512_ABC.hex()


@pytest.mark.parametrize("n", MESSAGE_LENGTHS)
def test_blake2b_matches_hashlib_unkeyed(n: int) -> None:
    data = _message(n)
    assert blake2b(data) == hashlib.blake2b(data).digest()


@pytest.mark.parametrize("kk", KEY_LENGTHS)
@pytest.mark.parametrize("n", [0, 1, 128, 129, 300])
def test_blake2b_matches_hashlib_keyed(kk: int, n: int) -> None:
    key = KEY_64[:kk]
    data = _message(n)
    assert blake2b(data, key) == hashlib.blake2b(data, key=key).digest()


@pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
def test_blake2b_accepts_bytes_like(wrap) -> None:
    data = _message(300)
    key = KEY_64[:32]
    expected = hashlib.blake2b(data, key=key).digest()
    assert blake2b(wrap(data), wrap(key)) == expected
    assert blake2b(wrap(data)) == hashlib.blake2b(data).digest()
    assert blake2b_hex(wrap(data), wrap(key), 32) == (
        hashlib.blake2b(data, digest_size=32, key=key).hexdigest()
    )


@pytest.mark.parametrize("nn", [1, 16, 20, 32, 48, 63, 64])
def test_blake2b_matches_hashlib_digest_size(nn: int) -> None:
    data = b"The quick brown fox jumps over the lazy dog"
    assert blake2b(data, digest_size=nn) == hashlib.blake2b(data, digest_size=nn).digest()
    assert (
        blake2b(data, b"secret", nn)
        == hashlib.blake2b(data, digest_size=nn, key=b"secret").digest()
    )


@pytest.mark.parametrize("nn", range(1, DIGEST_SIZE_MAX + 1))
def test_blake2b_output_length(nn: int) -> None:
    assert len(blake2b(b"hello", digest_size=nn)) == nn


def test_blake2b_deterministic() -> None:
    assert blake2b(b"same input") == blake2b(b"same input")
    assert blake2b(b"same input", b"k", 32) == blake2b(b"same input", b"k", 32)


def test_blake2b_single_bit_flips() -> None:
    data = bytearray(_message(200))
    base = blake2b(bytes(data))
    seen = {base}
    for pos in (0, 63, 127, 128, 199):
        for bit in (0, 7):
            flipped = bytearray(data)
            flipped[pos] ^= 1 << bit
            digest = blake2b(bytes(flipped))
            assert digest not in seen
            seen.add(digest)


def test_blake2b_key_bit_flip() -> None:
    key = bytearray(b"k" * 32)
    base = blake2b(b"message", bytes(key))
    key[31] ^= 0x01
    assert blake2b(b"message", bytes(key)) != base


def test_blake2b_keyed_differs_from_unkeyed() -> None:
    assert blake2b(b"message", b"key") != blake2b(b"message")
    # an empty key is no key
    assert blake2b(b"message", b"") == blake2b(b"message")


def test_blake2b_key_is_not_message_prefix() -> None:
    # key block is zero padded, so hashing key||message unkeyed must differ
    key = b"k" * 128
    assert blake2b(b"m", key[:64]) != blake2b(key + b"m")


def test_blake2b_digest_size_changes_digest() -> None:
    # nn is mixed into the initial state, not just used for truncation
    assert blake2b(b"abc", digest_size=32) != blake2b(b"abc")[:32]


@pytest.mark.parametrize("n", [127, 128, 129, 255, 256, 257])
def test_blake2b_block_boundaries(n: int) -> None:
    a = blake2b(_message(n))
    b = blake2b(_message(n) + b"\x00")
    assert a != b
    assert a == hashlib.blake2b(_message(n)).digest()


def test_blake2b_trailing_zero_bytes_matter() -> None:
    # padding must not make b"" and b"\x00" * k collide
    digests = {blake2b(b"\x00" * k) for k in (0, 1, 8, 127, 128)}
    assert len(digests) == 5


def test_blake2b_oversized_key_is_clamped() -> None:
    long_key = bytes(range(100))
    assert blake2b(b"abc", long_key) == blake2b(b"abc", long_key[:KEY_SIZE_MAX])


def test_blake2b_oversized_digest_size_is_clamped() -> None:
    assert blake2b(b"abc", digest_size=100) == BLAKE2B_512_ABC


def test_blake2b_zero_digest_size_is_empty() -> None:
    assert blake2b(b"abc", digest_size=0) == b""
    assert blake2b(b"abc", digest_size=-5) == b""


def test_blake2b_strict_accepts_valid_params() -> None:
    assert blake2b(b"abc", strict=True) == BLAKE2B_512_ABC
    assert blake2b(b"abc", KEY_64, 1, strict=True) == blake2b(b"abc", KEY_64, 1)


def test_blake2b_strict_rejects_long_key() -> None:
    with pytest.raises(ValueError, match="key must be at most 64 bytes"):
        blake2b(b"abc", bytes(65), strict=True)


@pytest.mark.parametrize("nn", [0, -1, 65, 100])
def test_blake2b_strict_rejects_digest_size(nn: int) -> None:
    with pytest.raises(ValueError, match="digest_size must be in range 1..64"):
        blake2b(b"abc", digest_size=nn, strict=True)
    with pytest.raises(ValueError):
        blake2b_hex(b"abc", digest_size=nn, strict=True)


def test_blake2b_independent_across_threads() -> None:
    inputs = [(_message(n), KEY_64[: n % 65], 1 + n % 64) for n in range(0, 600, 37)]
    expected = [blake2b(m, k, nn) for m, k, nn in inputs]
    with ThreadPoolExecutor(max_workers=4) as pool:
        got = list(pool.map(lambda args: blake2b(*args), inputs))
    assert got == expected
