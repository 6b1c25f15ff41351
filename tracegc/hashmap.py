"""Separately chained hash map keyed by integer addresses."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .murmur import bucket_index, generate_seed

HASHMAP_SIZE = 100


class HashMap:
    """A fixed-size chained hash map from addresses to values.

    Each chain keeps its most recently inserted entry first.
    """

    def __init__(self, size: int = HASHMAP_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"bucket count must be positive, got {size}")
        self._seed = generate_seed()
        self._buckets: list[dict[int, Any]] = [{} for _ in range(size)]
        self._count = 0

    @property
    def size(self) -> int:
        """Number of buckets."""
        return len(self._buckets)

    @property
    def seed(self) -> int:
        """Seed used to hash keys into buckets."""
        return self._seed

    def _chain(self, key: int) -> dict[int, Any]:
        return self._buckets[bucket_index(key, len(self._buckets), self._seed)]

    def insert(self, key: int, value: Any) -> None:
        """Map ``key`` to ``value``, replacing and moving any earlier entry."""
        chain = self._chain(key)
        if key in chain:
            del chain[key]
        else:
            self._count += 1
        chain[key] = value

    def lookup(self, key: int) -> Any:
        """Return the value for ``key``, or ``None`` when it is absent."""
        return self._chain(key).get(key)

    def delete(self, key: int) -> None:
        """Remove ``key`` if present."""
        chain = self._chain(key)
        if key in chain:
            del chain[key]
            self._count -= 1

    def clear(self) -> None:
        """Remove every entry, keeping the bucket count."""
        for chain in self._buckets:
            chain.clear()
        self._count = 0

    def bucket(self, index: int) -> tuple[tuple[int, Any], ...]:
        """Return the entries of one bucket, newest first."""
        if not 0 <= index < len(self._buckets):
            raise IndexError(f"bucket {index} out of range")
        return tuple(reversed(self._buckets[index].items()))

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        for index in range(len(self._buckets)):
            yield from self.bucket(index)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, int) or isinstance(key, bool):
            return False
        return key in self._chain(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, entries={self._count})"