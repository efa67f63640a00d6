"""Mergeable priority queues and a bloom filter sharing one length convention."""

from .datastructures import (
    BinaryHeap,
    BinomialHeap,
    BloomFilter,
    Heap,
    HeapType,
)

__all__ = ["BinaryHeap", "BinomialHeap", "BloomFilter", "Heap", "HeapType"]
__version__ = "0.1.0"
