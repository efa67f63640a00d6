from .heap import HasLength, Heap, HeapType
from .dynamic_array import DynamicArray
from .binary_heap import BinaryHeap
from .binomial_heap import BinomialHeap, BinomialTree, MergeBucket
from .bloom_filter import BloomFilter, Mask, MurmurHash

__all__ = [
    "HasLength",
    "Heap",
    "HeapType",
    "DynamicArray",
    "BinaryHeap",
    "BinomialHeap",
    "BinomialTree",
    "MergeBucket",
    "BloomFilter",
    "Mask",
    "MurmurHash",
]
