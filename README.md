# tracegc

Two tracing garbage collectors, mark-and-sweep and mark-compact, running over
a simulated word-addressed heap and a simulated stack of root slots. The
collectors keep their bookkeeping in small separate-chaining hash containers
whose bucket index comes from MurmurHash3 (x86, 32-bit).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `tracegc.murmur`
  - `murmurhash3_x86_32(data, seed=0)`: the 32-bit MurmurHash3 of a bytes
    value.
  - `murmur_hash3(key, seed=None)`: hashes an integer address packed as a
    little-endian 64-bit word. Keys must be integers in `0 .. 2**64 - 1`
    (`TypeError` / `ValueError` otherwise). Without a seed, the current time
    in whole seconds is used.
  - `bucket_index(key, size, seed=None)`: `murmur_hash3(key, seed) % size`;
    `size` must be positive.
  - `generate_seed()`: the current time in whole seconds, cut to 32 bits.
- `tracegc.hashmap.HashMap(size=100)`: a fixed-size chained hash map keyed by
  integer addresses. Each instance picks its seed once, when it is created.
  `insert(key, value)` replaces any earlier value, `lookup(key)` returns the
  value or `None`, `delete(key)` removes a key if present, `clear()` empties
  it, and `bucket(index)` returns one bucket's `(key, value)` pairs newest
  first. It supports `len()`, `in`, and iteration over `(key, value)` pairs
  bucket by bucket. `size` and `seed` are read-only properties.
- `tracegc.hashset.HashSet(size=1000)`: the same structure holding keys only;
  `lookup(key)` returns a `bool` and iteration yields keys.
- `tracegc.memory`
  - `Memory(capacity=1 << 20)`: a heap handing out zeroed, word-aligned
    blocks. Addresses are integers starting at `0x10000`, so `0` works as a
    null pointer. `allocate(size)` returns an address (raises `MemoryError`
    when the heap is full), `release(address)` gives a block back,
    `read_word` / `write_word` work on 8-byte little-endian words, and
    `read_bytes` / `write_bytes` on raw bytes. `base`, `capacity` and
    `in_use` are properties; `address in memory` tells whether a block starts
    there.
  - `Stack()`: slots of words that the collectors scan for roots. `push`
    returns the slot index; slots can be read and written by index.
- `tracegc.marksweep`
  - `MarkSweepCollector(memory, stack)`: `malloc(size)` (size `0` gives
    `None`), `free(address)` (null and untracked addresses are ignored),
    `is_tracked`, `metadata` (a `MetaData` with `size` and `marked`),
    `roots()`, `children(address)`, `mark(roots)`, `sweep()` and `run()`.
    `sweep()` and `run()` return the number of blocks freed.
- `tracegc.markcompact`
  - `MarkCompactCollector(memory, stack)`: the same operations, plus
    allocation-order tracking (`objects()`, `total_allocated`) and the
    compaction steps `compute_locations()`, `update_references(roots)`,
    `relocate()` and `compact(roots)`. Its `roots()` maps stack slot indexes
    to the blocks they name. `run()` marks, copies live blocks onto the blocks
    that come first in allocation order, rewrites stack slots and words inside
    blocks to the new addresses, and then sweeps the blocks left over.

Both collectors are conservative: any word that names a tracked block counts
as a pointer. `dump(message)` prints a listing of every tracked block with its
mark bit and size, and returns the same text; `run()` prints such a listing
after marking.

## Example

```python
from tracegc.memory import Memory, Stack
from tracegc.marksweep import MarkSweepCollector

memory = Memory(4096)
stack = Stack()
gc = MarkSweepCollector(memory, stack)

root = gc.malloc(16)
child = gc.malloc(16)
orphan = gc.malloc(16)

memory.write_word(root, child)   # root points at child
stack.push(root)                 # root is reachable from the stack

freed = gc.run()

assert freed == 1
assert gc.is_tracked(root)
assert gc.is_tracked(child)
assert not gc.is_tracked(orphan)
```

## Command

```
tracegc-demo
```

Builds a small binary tree of nodes on the simulated heap, cuts one branch,
runs the mark-compact collector and prints the heap before and after
collection, followed by the nodes still reachable from the root.

## What it does not do

The collectors manage only blocks on the simulated `Memory` and find roots
only in the simulated `Stack`; they do not manage Python objects or real
process memory. There is no command for the mark-and-sweep collector.