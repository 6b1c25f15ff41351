"""Separately chained hash set of integer addresses."""

from __future__ import annotations

from collections.abc import Iterator

from .murmur import bucket_index, generate_seed

HASHSET_SIZE = 1000


class HashSet:
    """A fixed-size chained hash set of addresses.

    Each chain keeps its most recently inserted key first.
    """

    def __init__(self, size: int = HASHSET_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"bucket count must be positive, got {size}")
        self._seed = generate_seed()
        self._buckets: list[dict[int, None]] = [{} for _ in range(size)]
        self._count = 0

    @property
    def size(self) -> int:
        """Number of buckets."""
        return len(self._buckets)

    @property
    def seed(self) -> int:
        """Seed used to hash keys into buckets."""
        return self._seed

    def _chain(self, key: int) -> dict[int, None]:
        return self._buckets[bucket_index(key, len(self._buckets), self._seed)]

    def insert(self, key: int) -> None:
        """Add ``key``; adding a present key changes nothing."""
        chain = self._chain(key)
        if key not in chain:
            chain[key] = None
            self._count += 1

    def lookup(self, key: int) -> bool:
        """Return whether ``key`` is in the set."""
        return key in self._chain(key)

    def delete(self, key: int) -> None:
        """Remove ``key`` if present."""
        chain = self._chain(key)
        if key in chain:
            del chain[key]
            self._count -= 1

    def clear(self) -> None:
        """Remove every key, keeping the bucket count."""
        for chain in self._buckets:
            chain.clear()
        self._count = 0

    def bucket(self, index: int) -> tuple[int, ...]:
        """Return the keys of one bucket, newest first."""
        if not 0 <= index < len(self._buckets):
            raise IndexError(f"bucket {index} out of range")
        return tuple(reversed(self._buckets[index]))

    def __iter__(self) -> Iterator[int]:
        for index in range(len(self._buckets)):
            yield from self.bucket(index)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, int) or isinstance(key, bool):
            return False
        return self.lookup(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, keys={self._count})"