"""A simulated word-addressed heap and a stack of root slots."""

from __future__ import annotations

from collections.abc import Iterator

WORD_SIZE = 8
_MAX_WORD = (1 << (8 * WORD_SIZE)) - 1
HEAP_BASE = 0x10000
DEFAULT_CAPACITY = 1 << 20


def _check_word(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"word must be an integer, not {type(value).__name__}")
    if not 0 <= value <= _MAX_WORD:
        raise ValueError(f"value {value:#x} does not fit in a word")
    return value


def _round_up(size: int) -> int:
    return -(-size // WORD_SIZE) * WORD_SIZE


class Memory:
    """A heap of ``capacity`` bytes handing out zeroed, word-aligned blocks.

    Addresses are plain integers starting at :data:`HEAP_BASE`, so that
    zero never names a block and can serve as a null pointer.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = _round_up(capacity)
        self._data = bytearray(self._capacity)
        self._blocks: dict[int, int] = {}

    @property
    def base(self) -> int:
        """Lowest address of the heap."""
        return HEAP_BASE

    @property
    def capacity(self) -> int:
        """Size of the heap in bytes."""
        return self._capacity

    @property
    def in_use(self) -> int:
        """Bytes held by live blocks, padding included."""
        return sum(self._blocks.values())

    def allocate(self, size: int) -> int:
        """Return the address of a new zeroed block of at least ``size`` bytes."""
        if size <= 0:
            raise ValueError(f"allocation size must be positive, got {size}")
        need = _round_up(size)
        candidate = HEAP_BASE
        for address in sorted(self._blocks):
            if address - candidate >= need:
                break
            candidate = address + self._blocks[address]
        if candidate + need > HEAP_BASE + self._capacity:
            raise MemoryError(f"unable to allocate memory for size {size}")
        self._blocks[candidate] = need
        offset = candidate - HEAP_BASE
        self._data[offset:offset + need] = bytes(need)
        return candidate

    def release(self, address: int) -> None:
        """Give back the block starting at ``address``."""
        if address not in self._blocks:
            raise ValueError(f"{address:#x} is not an allocated block")
        del self._blocks[address]

    def _offset(self, address: int, size: int) -> int:
        offset = address - HEAP_BASE
        if offset < 0 or offset + size > self._capacity:
            raise IndexError(f"{size} bytes at {address:#x} lie outside the heap")
        return offset

    def read_bytes(self, address: int, size: int) -> bytes:
        """Return ``size`` bytes starting at ``address``."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        offset = self._offset(address, size)
        return bytes(self._data[offset:offset + size])

    def write_bytes(self, address: int, data: bytes) -> None:
        """Store ``data`` starting at ``address``."""
        data = bytes(data)
        offset = self._offset(address, len(data))
        self._data[offset:offset + len(data)] = data

    def read_word(self, address: int) -> int:
        """Return the little-endian word stored at ``address``."""
        return int.from_bytes(self.read_bytes(address, WORD_SIZE), "little")

    def write_word(self, address: int, value: int) -> None:
        """Store ``value`` as a little-endian word at ``address``."""
        self.write_bytes(address, _check_word(value).to_bytes(WORD_SIZE, "little"))

    def __contains__(self, address: object) -> bool:
        return address in self._blocks

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, "
            f"blocks={len(self._blocks)})"
        )


class Stack:
    """A stack of word-sized slots that a collector scans for roots."""

    def __init__(self) -> None:
        self._slots: list[int] = []

    def push(self, value: int) -> int:
        """Push ``value`` and return the slot it occupies."""
        self._slots.append(_check_word(value))
        return len(self._slots) - 1

    def pop(self) -> int:
        """Remove and return the topmost slot."""
        if not self._slots:
            raise IndexError("pop from an empty stack")
        return self._slots.pop()

    def __getitem__(self, slot: int) -> int:
        return self._slots[slot]

    def __setitem__(self, slot: int, value: int) -> None:
        self._slots[slot] = _check_word(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({[hex(v) for v in self._slots]})"