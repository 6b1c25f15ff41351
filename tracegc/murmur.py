"""MurmurHash3 (x86, 32-bit) and the bucket hashing built on it."""

from __future__ import annotations

import struct
import time

_MASK32 = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593
_WORD = struct.Struct("<Q")
_MAX_KEY = (1 << 64) - 1


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK32


def _scramble(k: int) -> int:
    k = (k * _C1) & _MASK32
    k = _rotl32(k, 15)
    return (k * _C2) & _MASK32


def murmurhash3_x86_32(data: bytes, seed: int = 0) -> int:
    """Return the 32-bit MurmurHash3 of ``data`` under ``seed``."""
    data = bytes(data)
    h = seed & _MASK32
    body = len(data) - len(data) % 4

    for (k,) in struct.iter_unpack("<I", data[:body]):
        h ^= _scramble(k)
        h = _rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK32

    tail = data[body:]
    if tail:
        h ^= _scramble(int.from_bytes(tail, "little"))

    h ^= len(data) & _MASK32
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def generate_seed() -> int:
    """Return a seed taken from the current time in whole seconds."""
    return int(time.time()) & _MASK32


def _check_key(key: int) -> None:
    if not isinstance(key, int) or isinstance(key, bool):
        raise TypeError(f"key must be an integer address, not {type(key).__name__}")
    if not 0 <= key <= _MAX_KEY:
        raise ValueError(f"key {key:#x} does not fit in a 64-bit word")


def murmur_hash3(key: int, seed: int | None = None) -> int:
    """Hash an address, packed as a little-endian 64-bit word."""
    _check_key(key)
    if seed is None:
        seed = generate_seed()
    return murmurhash3_x86_32(_WORD.pack(key), seed)


def bucket_index(key: int, size: int, seed: int | None = None) -> int:
    """Return the bucket in ``range(size)`` that ``key`` hashes to."""
    if size <= 0:
        raise ValueError(f"bucket count must be positive, got {size}")
    return murmur_hash3(key, seed) % size