"""Ordering policy and the shared priority-queue contract.

Every heap in this package routes its comparisons through
:meth:`HeapType.is_correct`, so swapping the policy object swaps the
behaviour of a heap without touching the algorithm code.
"""

from __future__ import annotations

import abc
import enum
from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound="Heap[Any]")


class HeapType(enum.Enum):
    """Min- or Max-heap comparison semantics."""

    MIN = "min"
    MAX = "max"

    def is_correct(self, parent: Any, child: Any) -> bool:
        """Return True iff `child` may sit strictly below `parent`.

        Under MIN the child must be greater than the parent, under MAX
        smaller. Equal values are never "correct" in either direction.
        """
        if self is HeapType.MIN:
            return child > parent
        return child < parent


class HasLength(abc.ABC):
    """Length-reporting convention shared by heaps and the bloom filter."""

    __slots__ = ()

    @abc.abstractmethod
    def __len__(self) -> int:
        ...

    def is_empty(self) -> bool:
        return len(self) == 0

    def __bool__(self) -> bool:
        return len(self) != 0


class Heap(HasLength, Generic[T]):
    """Abstract priority queue parameterized by a :class:`HeapType`.

    Concrete heaps accept ``(heap_type=HeapType.MIN, it=None)`` and must
    report absence with ``None`` instead of raising on an empty heap.
    """

    __slots__ = ()

    @property
    @abc.abstractmethod
    def heap_type(self) -> HeapType:
        ...

    @abc.abstractmethod
    def peek(self) -> Optional[T]:
        """Return the best element without removing it, or None if empty."""

    @abc.abstractmethod
    def pop(self) -> Optional[T]:
        """Remove and return the best element, or None if empty."""

    @abc.abstractmethod
    def push(self, value: T) -> None:
        """Insert one element."""

    @abc.abstractmethod
    def meld(self: H, other: H) -> None:
        """Absorb every element of `other` in place; `other` ends empty."""

    @abc.abstractmethod
    def merge(self: H, other: H, new_heap_type: HeapType) -> H:
        """Combine both heaps under `new_heap_type`, consuming the inputs."""

    @abc.abstractmethod
    def copy(self: H) -> H:
        """Return an independent heap holding the same elements."""

    @abc.abstractmethod
    def to_list(self) -> List[T]:
        """Return the elements in internal (not sorted) order."""

    # -----------------------------
    # Shared helpers
    # -----------------------------
    @classmethod
    def min_heap(cls: type[H], it: Optional[Iterable[Any]] = None) -> H:
        return cls(HeapType.MIN, it)  # type: ignore[call-arg]

    @classmethod
    def max_heap(cls: type[H], it: Optional[Iterable[Any]] = None) -> H:
        return cls(HeapType.MAX, it)  # type: ignore[call-arg]

    def push_all(self, it: Iterable[T]) -> None:
        for value in it:
            self.push(value)

    def drain(self) -> Iterator[T]:
        """Pop until empty, yielding elements best-first."""
        while not self.is_empty():
            yield self.pop()  # type: ignore[misc]

    def __iter__(self) -> Iterator[T]:  # pragma: no cover - simple
        # Internal order, not sorted order
        return iter(self.to_list())

    @staticmethod
    def _check_heap_type(heap_type: HeapType) -> HeapType:
        if not isinstance(heap_type, HeapType):
            raise TypeError(f"heap_type must be a HeapType, got {heap_type!r}")
        return heap_type
