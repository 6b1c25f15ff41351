"""Mark-and-sweep and mark-compact collectors over a simulated heap, with MurmurHash3 hash containers."""

__version__ = "0.1.0"

__all__ = ["hashmap", "hashset", "markcompact", "marksweep", "memory", "murmur"]