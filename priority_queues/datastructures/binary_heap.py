from __future__ import annotations
from typing import Iterable, List, Optional, TypeVar

from .dynamic_array import DynamicArray
from .heap import Heap, HeapType

T = TypeVar("T")


class BinaryHeap(Heap[T]):
    """An array-backed binary heap with optional bulk heapify support."""

    __slots__ = ("_data", "_h_type")

    def __init__(self, heap_type: HeapType = HeapType.MIN, it: Optional[Iterable[T]] = None) -> None:
        self._h_type = self._check_heap_type(heap_type)
        self._data: DynamicArray[T] = DynamicArray()
        if it is not None:
            self._data.extend(it)
            self._heapify()  # Bulk build in O(n) instead of repeated pushes

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _sift_up(self, idx: int) -> None:
        data = self._data
        better = self._h_type.is_correct
        while idx > 0:
            parent = (idx - 1) // 2
            if not better(data[idx], data[parent]):
                break
            data.swap(parent, idx)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        data = self._data
        better = self._h_type.is_correct
        n = len(data)
        while True:
            left = 2 * idx + 1
            right = 2 * idx + 2
            best = idx
            if left < n and better(data[left], data[best]):
                best = left
            if right < n and better(data[right], data[best]):
                best = right
            if best == idx:
                break
            data.swap(idx, best)
            idx = best

    def _heapify(self) -> None:
        """Transform the current array into a heap in-place in O(n) time."""
        n = len(self._data)
        for i in reversed(range(n // 2)):
            self._sift_down(i)

    # -----------------------------
    # Public API
    # -----------------------------
    @property
    def heap_type(self) -> HeapType:
        return self._h_type

    def push(self, item: T) -> None:
        """Push item onto the heap (O(log n))."""
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def pop(self) -> Optional[T]:
        """Pop and return the best item (O(log n)), or None if empty."""
        data = self._data
        if not data:
            return None
        top = data[0]
        last = data.pop()
        if data:
            data[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> Optional[T]:
        """Return the best item without removing it (O(1))."""
        return self._data[0] if self._data else None

    def replace(self, item: T) -> Optional[T]:
        """Pop the best item, then push `item` (O(log n)).

        On an empty heap `item` is simply pushed and None is returned.
        """
        if not self._data:
            self.push(item)
            return None
        top = self._data[0]
        self._data[0] = item
        self._sift_down(0)
        return top

    def pushpop(self, item: T) -> T:
        """Push item then pop the best in a single O(log n) operation."""
        if self._data and self._h_type.is_correct(self._data[0], item):
            item, self._data[0] = self._data[0], item
            self._sift_down(0)
        return item

    def meld(self, other: BinaryHeap[T]) -> None:
        """Absorb `other`'s items and rebuild under this heap's policy (O(n + m))."""
        if other is self:
            return
        self._data.extend(other._data)
        other._data.clear()
        self._heapify()

    def merge(self, other: BinaryHeap[T], new_heap_type: HeapType) -> BinaryHeap[T]:
        """Build a fresh heap under `new_heap_type`; both inputs end empty."""
        items = self._data.to_list()
        if other is not self:
            items.extend(other._data)
            other._data.clear()
        self._data.clear()
        return BinaryHeap(new_heap_type, items)

    def copy(self) -> BinaryHeap[T]:
        clone: BinaryHeap[T] = BinaryHeap(self._h_type)
        clone._data.extend(self._data)
        return clone

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._data)

    def to_list(self) -> List[T]:  # pragma: no cover - trivial
        return self._data.to_list()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BinaryHeap({self._h_type.value}, {self.to_list()!r})"
