"""A conservative mark-compact collector over a simulated heap."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .hashmap import HashMap
from .hashset import HashSet
from .memory import WORD_SIZE, Memory, Stack


@dataclass(eq=False)
class ObjectMeta:
    """Bookkeeping kept for each tracked block."""

    address: int
    size: int
    marked: bool = False
    forwarding_address: int | None = None


class MarkCompactCollector:
    """Tracks blocks in allocation order and slides live data to the front.

    Live objects are copied, in allocation order, onto the blocks that
    come first in that order; pointers on the stack and inside every
    block are rewritten to the new places, and the blocks left over at
    the end are freed.
    """

    def __init__(self, memory: Memory, stack: Stack) -> None:
        self.memory = memory
        self.stack = stack
        self._addresses = HashSet()
        self._metadata = HashMap()
        self._objects: list[ObjectMeta] = []

    @property
    def total_allocated(self) -> int:
        """Number of tracked blocks."""
        return len(self._objects)

    def malloc(self, size: int) -> int | None:
        """Allocate a zeroed, tracked block; a size of zero gives ``None``."""
        if size == 0:
            return None
        address = self.memory.allocate(size)
        meta = ObjectMeta(address=address, size=size)
        self._addresses.insert(address)
        self._metadata.insert(address, meta)
        self._objects.append(meta)
        return address

    def free(self, address: int | None) -> None:
        """Free a tracked block; null and untracked addresses are ignored."""
        if not address or not self.is_tracked(address):
            return
        meta = self.metadata(address)
        if meta is not None:
            self._objects = [obj for obj in self._objects if obj is not meta]
        self._addresses.delete(address)
        self._metadata.delete(address)
        self.memory.release(address)

    def is_tracked(self, address: int | None) -> bool:
        """Return whether ``address`` starts a block this collector owns."""
        return address is not None and address in self._addresses

    def metadata(self, address: int) -> ObjectMeta | None:
        """Return the bookkeeping for ``address``, or ``None``."""
        return self._metadata.lookup(address)

    def objects(self) -> tuple[ObjectMeta, ...]:
        """Return the bookkeeping of every tracked block in allocation order."""
        return tuple(self._objects)

    def roots(self) -> HashMap:
        """Map each stack slot that names a tracked block to that block."""
        found = HashMap()
        for slot, word in enumerate(self.stack):
            if self.is_tracked(word):
                found.insert(slot, word)
        return found

    def children(self, address: int) -> HashSet:
        """Return the tracked blocks named by aligned words inside ``address``."""
        meta = self.metadata(address) if self.is_tracked(address) else None
        if meta is None:
            raise KeyError(f"{address:#x} is not a tracked block")
        found = HashSet()
        for offset in range(0, meta.size, WORD_SIZE):
            word = self.memory.read_word(address + offset)
            if word % WORD_SIZE == 0 and self.is_tracked(word):
                found.insert(word)
        return found

    def mark(self, roots: HashMap | None) -> None:
        """Mark every block reachable from the blocks that ``roots`` maps to."""
        if roots is None:
            return
        pending = [address for _, address in roots]
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

    def compute_locations(self) -> None:
        """Give each marked block the address of the next block from the front."""
        targets = iter(self._objects)
        for meta in self._objects:
            if meta.marked:
                meta.forwarding_address = next(targets).address

    def update_references(self, roots: HashMap) -> None:
        """Rewrite stack slots and heap words to the forwarding addresses."""
        for slot, address in roots:
            meta = self.metadata(address)
            if meta is not None and meta.forwarding_address:
                self.stack[slot] = meta.forwarding_address

        for obj in self._objects:
            for offset in range(0, obj.size, WORD_SIZE):
                where = obj.address + offset
                meta = self.metadata(self.memory.read_word(where))
                if meta is not None and meta.forwarding_address:
                    self.memory.write_word(where, meta.forwarding_address)

    def relocate(self) -> None:
        """Copy marked blocks to their forwarding addresses and unmark the rest."""
        garbage = 0
        for obj in self._objects:
            if not obj.marked:
                garbage += 1
                continue
            destination = obj.forwarding_address
            target = self.metadata(destination) if destination else None
            if target is None:
                raise RuntimeError(
                    f"block {obj.address:#x} has no forwarding address; "
                    "compute locations first"
                )
            data = self.memory.read_bytes(obj.address, obj.size)
            self.memory.write_bytes(destination, data)
            target.size = obj.size
            target.marked = True

        live = len(self._objects) - garbage
        for obj in self._objects[live:]:
            obj.marked = False

    def compact(self, roots: HashMap) -> None:
        """Slide marked blocks to the front and fix every reference to them."""
        self.compute_locations()
        self.update_references(roots)
        self.relocate()

    def run(self) -> int:
        """Collect garbage once and return the number of blocks freed."""
        roots = self.roots()
        self._print_objects()
        self.mark(roots)
        self.dump("After Marking")
        self.compact(roots)
        return self.sweep()

    def _print_objects(self) -> None:
        chain = "".join(f"{obj.address:#x} -> " for obj in self._objects)
        sys.stdout.write(f"====================\n{chain}NULL\n====================\n")

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
        return len(self._objects)


_NODE_SIZE = 3 * WORD_SIZE
_LEFT = WORD_SIZE
_RIGHT = 2 * WORD_SIZE


def _create_graph(gc: MarkCompactCollector) -> int:
    memory = gc.memory
    nodes = {}
    for name in "abcdefgh":
        address = gc.malloc(_NODE_SIZE)
        memory.write_bytes(address, name.encode("ascii"))
        nodes[name] = address
    for parent, left, right in (("a", "b", "c"), ("c", "d", "e"), ("e", "f", "g")):
        memory.write_word(nodes[parent] + _LEFT, nodes[left])
        memory.write_word(nodes[parent] + _RIGHT, nodes[right])
    memory.write_word(nodes["g"] + _RIGHT, nodes["h"])
    return nodes["a"]


def _print_graph(memory: Memory, root: int) -> None:
    if not root:
        return
    print(memory.read_bytes(root, 1).decode("ascii"))
    _print_graph(memory, memory.read_word(root + _LEFT))
    _print_graph(memory, memory.read_word(root + _RIGHT))


def main(argv: Sequence[str] | None = None) -> int:
    """Build a small tree, drop one branch, collect, and print what is left."""
    parser = argparse.ArgumentParser(
        prog="tracegc",
        description="Demonstrate mark-compact collection on a small tree.",
    )
    parser.parse_args(argv)

    memory = Memory()
    stack = Stack()
    gc = MarkCompactCollector(memory, stack)

    slot = stack.push(_create_graph(gc))
    gc.dump("Allocated Graph")
    memory.write_word(stack[slot] + _LEFT, 0)
    gc.run()
    gc.dump("After GC")

    _print_graph(memory, stack[slot])
    return 0


if __name__ == "__main__":
    sys.exit(main())