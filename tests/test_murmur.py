import time
from unittest import mock

import pytest

from tracegc.murmur import (
    bucket_index,
    generate_seed,
    murmur_hash3,
    murmurhash3_x86_32,
)


def test_empty_input_seed_zero():
    assert murmurhash3_x86_32(b"", 0) == 0


def test_empty_input_seed_one():
    assert murmurhash3_x86_32(b"", 1) == 0x514E28B7


def test_reference_vector_with_seed():
    assert murmurhash3_x86_32(b"aaaa", 0x9747B28C) == 0x5A97808A


@pytest.mark.parametrize("length", range(0, 12))
def test_every_tail_length_is_deterministic_and_32_bit(length):
    data = bytes(range(1, length + 1))
    first = murmurhash3_x86_32(data, 42)
    assert first == murmurhash3_x86_32(data, 42)
    assert 0 <= first <= 0xFFFFFFFF


def test_single_bytes_hash_apart():
    hashes = {murmurhash3_x86_32(bytes([b]), 7) for b in range(256)}
    assert len(hashes) == 256


def test_seed_is_taken_modulo_32_bits():
    assert murmurhash3_x86_32(b"abcdef", 5) == murmurhash3_x86_32(b"abcdef", 5 + (1 << 32))


def test_accepts_bytearray():
    assert murmurhash3_x86_32(bytearray(b"xyz"), 3) == murmurhash3_x86_32(b"xyz", 3)


def test_generate_seed_follows_clock():
    with mock.patch.object(time, "time", return_value=1700000000.9):
        assert generate_seed() == 1700000000


def test_generate_seed_wraps_to_32_bits():
    with mock.patch.object(time, "time", return_value=float((1 << 32) + 5)):
        assert generate_seed() == 5


def test_murmur_hash3_hashes_packed_word():
    key = 0x7FF000000000
    assert murmur_hash3(key, 11) == murmurhash3_x86_32(key.to_bytes(8, "little"), 11)


def test_murmur_hash3_default_seed_uses_clock():
    with mock.patch.object(time, "time", return_value=123456.0):
        assert murmur_hash3(0x1000) == murmur_hash3(0x1000, 123456)


@pytest.mark.parametrize("key", [-1, 1 << 64])
def test_murmur_hash3_rejects_out_of_range(key):
    with pytest.raises(ValueError):
        murmur_hash3(key, 0)


@pytest.mark.parametrize("key", ["0x10", 1.5, True])
def test_murmur_hash3_rejects_non_integers(key):
    with pytest.raises(TypeError):
        murmur_hash3(key, 0)


def test_bucket_index_in_range_and_stable():
    base = 0x7FF000000000
    for i in range(200):
        key = base + i * 8
        index = bucket_index(key, 100, 99)
        assert 0 <= index < 100
        assert index == bucket_index(key, 100, 99)


def test_bucket_index_matches_hash_modulo():
    key = 0xFFF000000001
    assert bucket_index(key, 1000, 17) == murmur_hash3(key, 17) % 1000


@pytest.mark.parametrize("size", [0, -3])
def test_bucket_index_rejects_bad_size(size):
    with pytest.raises(ValueError):
        bucket_index(0x10, size, 0)