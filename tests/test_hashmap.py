import pytest

from tracegc.hashmap import HASHMAP_SIZE, HashMap
from tracegc.murmur import bucket_index

BASE_ADDRESS = 0x7FF000000000
BASE_VALUE = 0xFFF000000001
WORD = 8


def _fill(hash_map, n):
    for i in range(n):
        hash_map.insert(BASE_ADDRESS + i * WORD, BASE_VALUE + i * WORD)


def test_init():
    hash_map = HashMap()
    assert hash_map.size == HASHMAP_SIZE == 100
    assert all(hash_map.bucket(i) == () for i in range(HASHMAP_SIZE))
    assert len(hash_map) == 0


def test_insert_and_lookup():
    hash_map = HashMap()
    hash_map.insert(BASE_ADDRESS, BASE_VALUE)
    assert hash_map.lookup(BASE_ADDRESS) == BASE_VALUE


def test_multiple_inserts():
    hash_map = HashMap()
    _fill(hash_map, 100)
    for i in range(100):
        assert hash_map.lookup(BASE_ADDRESS + i * WORD) == BASE_VALUE + i * WORD


def test_update():
    hash_map = HashMap()
    hash_map.insert(BASE_ADDRESS, 0xFFF000000001)
    hash_map.insert(BASE_ADDRESS, 0xFFF000000002)
    assert hash_map.lookup(BASE_ADDRESS) == 0xFFF000000002
    assert len(hash_map) == 1


def test_iterator():
    hash_map = HashMap()
    _fill(hash_map, 100)
    entries = list(hash_map)
    assert len(entries) == 100
    assert dict(entries) == {
        BASE_ADDRESS + i * WORD: BASE_VALUE + i * WORD for i in range(100)
    }


def test_collision_handling():
    hash_map = HashMap()
    _fill(hash_map, HASHMAP_SIZE + 1)
    shared = next(hash_map.bucket(i) for i in range(HASHMAP_SIZE) if len(hash_map.bucket(i)) > 1)
    (key1, value1), (key2, value2) = shared[:2]
    assert hash_map.lookup(key1) == value1
    assert hash_map.lookup(key2) == value2


def test_stress():
    hash_map = HashMap()
    _fill(hash_map, 100000)
    assert sum(1 for _ in hash_map) == 100000
    assert len(hash_map) == 100000


def test_lookup_missing_returns_none():
    hash_map = HashMap()
    assert hash_map.lookup(BASE_ADDRESS) is None
    hash_map.insert(BASE_ADDRESS + WORD, BASE_VALUE)
    assert hash_map.lookup(BASE_ADDRESS) is None


def test_delete():
    hash_map = HashMap()
    _fill(hash_map, 10)
    hash_map.delete(BASE_ADDRESS)
    assert hash_map.lookup(BASE_ADDRESS) is None
    assert BASE_ADDRESS not in hash_map
    assert len(hash_map) == 9


def test_delete_missing_is_noop():
    hash_map = HashMap()
    _fill(hash_map, 3)
    hash_map.delete(0x1234)
    assert len(hash_map) == 3


def test_chain_is_newest_first_and_update_moves_to_front():
    hash_map = HashMap(size=1)
    hash_map.insert(1, "a")
    hash_map.insert(2, "b")
    hash_map.insert(3, "c")
    assert hash_map.bucket(0) == ((3, "c"), (2, "b"), (1, "a"))
    hash_map.insert(1, "z")
    assert hash_map.bucket(0) == ((1, "z"), (3, "c"), (2, "b"))


def test_entries_land_in_their_hashed_bucket():
    hash_map = HashMap()
    _fill(hash_map, 50)
    for i in range(50):
        key = BASE_ADDRESS + i * WORD
        index = bucket_index(key, hash_map.size, hash_map.seed)
        assert (key, BASE_VALUE + i * WORD) in hash_map.bucket(index)


def test_iteration_survives_deleting_current_key():
    hash_map = HashMap()
    _fill(hash_map, 30)
    seen = []
    for key, _ in hash_map:
        seen.append(key)
        hash_map.delete(key)
    assert len(seen) == 30
    assert len(hash_map) == 0


def test_clear():
    hash_map = HashMap()
    _fill(hash_map, 20)
    hash_map.clear()
    assert len(hash_map) == 0
    assert list(hash_map) == []
    assert hash_map.size == HASHMAP_SIZE


def test_contains():
    hash_map = HashMap()
    hash_map.insert(BASE_ADDRESS, None)
    assert BASE_ADDRESS in hash_map
    assert BASE_ADDRESS + WORD not in hash_map
    assert "text" not in hash_map


@pytest.mark.parametrize("index", [-1, HASHMAP_SIZE])
def test_bucket_out_of_range(index):
    with pytest.raises(IndexError):
        HashMap().bucket(index)


def test_bad_size():
    with pytest.raises(ValueError):
        HashMap(0)


def test_bad_key():
    with pytest.raises(TypeError):
        HashMap().insert("key", 1)