"""A conservative mark-and-sweep collector over a simulated heap."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass

from .hashmap import HashMap
from .hashset import HashSet
from .memory import WORD_SIZE, Memory, Stack


@dataclass
class MetaData:
    """Bookkeeping kept for each tracked block."""

    size: int
    marked: bool = False


class MarkSweepCollector:
    """Tracks blocks it hands out and frees those no root can reach.

    Roots are found by scanning every stack slot; any word that is
    word-aligned and names a tracked block counts as a pointer.
    """

    def __init__(self, memory: Memory, stack: Stack) -> None:
        self.memory = memory
        self.stack = stack
        self._addresses = HashSet()
        self._metadata = HashMap()

    def malloc(self, size: int) -> int | None:
        """Allocate a zeroed, tracked block; a size of zero gives ``None``."""
        if size == 0:
            return None
        address = self.memory.allocate(size)
        self._addresses.insert(address)
        self._metadata.insert(address, MetaData(size=size))
        return address

    def free(self, address: int | None) -> None:
        """Free a tracked block; null and untracked addresses are ignored."""
        if not address or not self.is_tracked(address):
            return
        self._addresses.delete(address)
        self._metadata.delete(address)
        self.memory.release(address)

    def is_tracked(self, address: int | None) -> bool:
        """Return whether ``address`` starts a block this collector owns."""
        return address is not None and address in self._addresses

    def metadata(self, address: int) -> MetaData | None:
        """Return the bookkeeping for ``address``, or ``None``."""
        return self._metadata.lookup(address)

    def _is_pointer(self, word: int) -> bool:
        return word % WORD_SIZE == 0 and self.is_tracked(word)

    def roots(self) -> HashSet:
        """Return the tracked blocks named by some stack slot."""
        found = HashSet()
        for word in self.stack:
            if self._is_pointer(word):
                found.insert(word)
        return found

    def children(self, address: int) -> HashSet:
        """Return the tracked blocks named by words inside ``address``."""
        meta = self.metadata(address) if self.is_tracked(address) else None
        if meta is None:
            raise KeyError(f"{address:#x} is not a tracked block")
        found = HashSet()
        for offset in range(0, meta.size, WORD_SIZE):
            word = self.memory.read_word(address + offset)
            if self._is_pointer(word):
                found.insert(word)
        return found

    def mark(self, roots: Iterable[int]) -> None:
        """Mark every block reachable from ``roots``."""
        pending = list(roots)
        while pending:
            address = pending.pop()
            if not address or not self.is_tracked(address):
                continue
            meta = self.metadata(address)
            if meta is None or meta.marked:
                continue
            meta.marked = True
            pending.extend(self.children(address))

    def sweep(self) -> int:
        """Free unmarked blocks, clear marks on the rest, return the count freed."""
        freed = 0
        for address in list(self._addresses):
            meta = self.metadata(address)
            if meta is None:
                continue
            if meta.marked:
                meta.marked = False
            else:
                self.free(address)
                freed += 1
        return freed

    def run(self) -> int:
        """Collect garbage once and return the number of blocks freed."""
        self.mark(self.roots())
        self.dump("After Marking")
        return self.sweep()

    def dump(self, message: str) -> str:
        """Print and return a listing of every tracked block."""
        lines = [f"{message}\n", "{"]
        count = 0
        for address in self._addresses:
            count += 1
            meta = self.metadata(address)
            if meta is None:
                continue
            lines.append(
                f"\t{address:#x} : {{marked: {int(meta.marked)}, size: {meta.size}}},"
            )
        lines.append(f"\n\nTotal Allocated: {count}")
        lines.append("}")
        text = "\n".join(lines) + "\n"
        sys.stdout.write(text)
        return text

    def __len__(self) -> int:
        return len(self._addresses)