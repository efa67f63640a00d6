from __future__ import annotations
import ctypes
from typing import Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class DynamicArray(Generic[T]):
    """A growable array of Python objects backed by raw ctypes storage.

    Implementation notes
    --------------------
    • Storage is a ctypes array of `py_object` (not Python's built-in list).
    • Capacity doubles when full and halves when a pop leaves it quarter-full.
    • Negative indices are normalized (like built-in list semantics).
    • `swap` exchanges two slots in place; the binary heap's sift loops use it.
    """

    __slots__ = ("_buf", "_size", "_capacity")

    # Initial allocated capacity for the dynamic array.
    _INITIAL_CAPACITY = 4

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._capacity = self._INITIAL_CAPACITY
        self._buf = self._make_array(self._capacity)
        self._size = 0
        if it is not None:
            self.extend(it)

    # ------------------------------- internals -------------------------------

    @staticmethod
    def _make_array(capacity: int):
        """Allocate a raw ctypes array of length `capacity` to hold py_object."""
        if capacity <= 0:
            capacity = 1  # never allow a zero-length buffer
        return (capacity * ctypes.py_object)()

    def _resize(self, new_capacity: int) -> None:
        """Move live items into a buffer of `new_capacity` (must be ≥ size)."""
        if new_capacity < self._size:
            raise ValueError("new capacity must be >= size")

        new_buf = self._make_array(new_capacity)
        for i in range(self._size):
            new_buf[i] = self._buf[i]

        self._buf = new_buf
        self._capacity = new_capacity

    @staticmethod
    def _normalize_index(idx: int, size: int) -> int:
        """Map negative indices and validate bounds.

        Raises IndexError if out of range.
        """
        if idx < 0:
            idx += size
        if idx < 0 or idx >= size:
            raise IndexError("array index out of range")
        return idx

    # --------------------------------- API -----------------------------------

    def append(self, value: T) -> None:
        """Append `value` to the end. Amortized O(1)."""
        if self._size >= self._capacity:
            self._resize(self._capacity * 2)
        self._buf[self._size] = value
        self._size += 1

    def extend(self, it: Iterable[T]) -> None:
        """Append all elements from `it` in order."""
        for v in it:
            self.append(v)

    def pop(self) -> T:
        """Remove and return the last item. Amortized O(1).

        Raises:
            IndexError: if the array is empty.
        """
        if self._size == 0:
            raise IndexError("pop from empty array")

        self._size -= 1
        val = self._buf[self._size]
        self._buf[self._size] = None  # drop the reference

        if self._capacity > self._INITIAL_CAPACITY and self._size <= self._capacity // 4:
            self._resize(max(self._INITIAL_CAPACITY, self._capacity // 2))

        return val  # type: ignore[return-value]

    def swap(self, i: int, j: int) -> None:
        """Exchange the items at `i` and `j` in place."""
        i = self._normalize_index(i, self._size)
        j = self._normalize_index(j, self._size)
        self._buf[i], self._buf[j] = self._buf[j], self._buf[i]

    def clear(self) -> None:
        """Remove all items and fall back to the initial capacity."""
        self._capacity = self._INITIAL_CAPACITY
        self._buf = self._make_array(self._capacity)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self._buf[i]  # type: ignore[misc]

    def __getitem__(self, idx: int) -> T:
        i = self._normalize_index(idx, self._size)
        return self._buf[i]  # type: ignore[return-value]

    def __setitem__(self, idx: int, value: T) -> None:
        i = self._normalize_index(idx, self._size)
        self._buf[i] = value

    def __contains__(self, value: object) -> bool:
        """Return True if `value` is present (linear scan)."""
        for i in range(self._size):
            if self._buf[i] == value:
                return True
        return False

    def to_list(self) -> list[T]:
        return list(self)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DynamicArray({self.to_list()!r})"
