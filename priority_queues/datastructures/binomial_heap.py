"""Binomial heap: a rank-indexed forest of binomial trees.

The forest behaves like a binary number. Slot ``i`` holds at most one tree of
exactly ``2**i`` values, and :meth:`BinomialHeap.meld` combines two forests
rank by rank the way ripple-carry addition combines two binary numbers. Both
:meth:`BinomialHeap.push` and :meth:`BinomialHeap.pop` are expressed as melds.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, TypeVar

from .heap import Heap, HeapType

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BinomialTree:
    """A binomial tree node owning its ordered list of subtrees.

    Subtree ``i`` has rank ``i``, so a tree of rank ``k`` holds ``2**k``
    values. Every subtree root is no better than ``value`` under the heap's
    ordering.
    """

    __slots__ = ("rank", "value", "subtrees")

    def __init__(self, value) -> None:
        self.rank: int = 0
        self.value = value
        self.subtrees: List[BinomialTree] = []

    @staticmethod
    def merge_trees(first: BinomialTree, second: BinomialTree, heap_type: HeapType) -> BinomialTree:
        """Link two same-rank trees; the loser becomes the winner's last subtree."""
        assert first.rank == second.rank, "merge_trees requires equal ranks"
        if heap_type.is_correct(first.value, second.value):
            winner, loser = first, second
        else:
            winner, loser = second, first
        winner.subtrees.append(loser)
        winner.rank += 1
        return winner

    def fill_list(self, out: list) -> None:
        """Append this tree's values to `out` in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            out.append(node.value)
            stack.extend(reversed(node.subtrees))

    def copy(self) -> BinomialTree:
        clone = BinomialTree(self.value)
        clone.rank = self.rank
        clone.subtrees = [t.copy() for t in self.subtrees]
        return clone

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BinomialTree(rank={self.rank}, value={self.value!r})"


class MergeBucket:
    """Scratch stack of at most three same-rank trees used by one meld step.

    A rank position sees at most one tree from each forest plus one carry,
    so a fourth push means a caller broke the rank alignment.
    """

    __slots__ = ("_bucket", "_size")

    CAPACITY = 3

    def __init__(self) -> None:
        self._bucket: List[Optional[BinomialTree]] = [None] * self.CAPACITY
        self._size = 0

    def push(self, tree: BinomialTree) -> None:
        assert self._size < self.CAPACITY, "merge bucket overflow"
        if self._size < self.CAPACITY:
            self._bucket[self._size] = tree
            self._size += 1

    def pop(self) -> Optional[BinomialTree]:
        if self._size == 0:
            return None
        self._size -= 1
        tree = self._bucket[self._size]
        self._bucket[self._size] = None
        return tree

    def __len__(self) -> int:
        return self._size


class BinomialHeap(Heap[T]):
    """A mergeable priority queue with O(log n) push, pop and meld."""

    __slots__ = ("_h_type", "_trees", "_length", "_pointer")

    def __init__(self, heap_type: HeapType = HeapType.MIN, it: Optional[Iterable[T]] = None) -> None:
        self._h_type = self._check_heap_type(heap_type)
        self._trees: List[Optional[BinomialTree]] = []
        self._length = 0
        self._pointer = 0
        if it is not None:
            self.push_all(it)

    @classmethod
    def _from_trees(cls, heap_type: HeapType, trees: List[Optional[BinomialTree]], length: int) -> BinomialHeap[T]:
        heap: BinomialHeap[T] = cls(heap_type)
        heap._trees = trees
        heap._length = length
        heap._update_pointer()
        return heap

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _update_pointer(self) -> None:
        """Point at the best root; ties go to the lowest rank."""
        best: Optional[int] = None
        for i, tree in enumerate(self._trees):
            if tree is None:
                continue
            if best is None or self._h_type.is_correct(tree.value, self._trees[best].value):  # type: ignore[union-attr]
                best = i
        self._pointer = 0 if best is None else best

    def _clear(self) -> None:
        self._trees = []
        self._length = 0
        self._pointer = 0

    def _meld_forest(self, other: BinomialHeap[T]) -> None:
        h_type = self._h_type
        mine, theirs = self._trees, other._trees
        max_rank = max(len(mine), len(theirs))
        merged: List[Optional[BinomialTree]] = [None] * (max_rank + 1)
        carry: Optional[BinomialTree] = None

        for i in range(max_rank):
            bucket = MergeBucket()
            if i < len(mine) and mine[i] is not None:
                bucket.push(mine[i])  # type: ignore[arg-type]
            if i < len(theirs) and theirs[i] is not None:
                bucket.push(theirs[i])  # type: ignore[arg-type]
            if carry is not None:
                bucket.push(carry)
                carry = None

            count = len(bucket)
            if count == 1:
                merged[i] = bucket.pop()
            elif count >= 2:
                if count == 3:
                    merged[i] = bucket.pop()
                second = bucket.pop()
                first = bucket.pop()
                carry = BinomialTree.merge_trees(first, second, h_type)  # type: ignore[arg-type]

        if carry is not None:
            merged[max_rank] = carry

        while merged and merged[-1] is None:
            merged.pop()

        self._trees = merged
        self._length += other._length
        other._clear()

    # -----------------------------
    # Public API
    # -----------------------------
    @property
    def heap_type(self) -> HeapType:
        return self._h_type

    def peek(self) -> Optional[T]:
        """Return the best element (O(1)), or None if empty."""
        if self._length == 0:
            return None
        return self._trees[self._pointer].value  # type: ignore[union-attr]

    def push(self, value: T) -> None:
        """Meld a one-element forest into this heap (O(log n))."""
        self.meld(BinomialHeap._from_trees(self._h_type, [BinomialTree(value)], 1))

    def pop(self) -> Optional[T]:
        """Remove and return the best element (O(log n)), or None if empty."""
        if self._length == 0:
            return None
        tree = self._trees[self._pointer]
        self._trees[self._pointer] = None
        assert tree is not None
        k = tree.rank
        self._length -= 1 << k

        # Subtree r of a rank-k tree has rank r, so it lands in slot r.
        rest: List[Optional[BinomialTree]] = [None] * k
        for child in tree.subtrees:
            rest[child.rank] = child
        self.meld(BinomialHeap._from_trees(self._h_type, rest, (1 << k) - 1))
        return tree.value

    def meld(self, other: BinomialHeap[T]) -> None:
        """Absorb `other` in place, leaving it empty.

        Same-policy forests are combined rank by rank in O(log n). When the
        policies differ, `other` is flattened and its values re-pushed.
        """
        if other is self:
            return
        if self._h_type == other._h_type:
            self._meld_forest(other)
        else:
            logger.debug(
                "meld across policies (%s <- %s): re-inserting %d values",
                self._h_type.value, other._h_type.value, len(other),
            )
            values = other.to_list()
            other._clear()
            for value in values:
                self.push(value)
        self._update_pointer()

    def merge(self, other: BinomialHeap[T], new_heap_type: HeapType) -> BinomialHeap[T]:
        """Return one heap under `new_heap_type` holding both inputs' values.

        Both inputs are consumed: the returned heap may be `self` or `other`,
        and any input that is not returned is left empty.
        """
        self._check_heap_type(new_heap_type)
        first_ok = self._h_type == new_heap_type
        second_ok = other._h_type == new_heap_type

        if first_ok and second_ok:
            self.meld(other)
            return self
        if first_ok:
            logger.debug("merge: re-inserting %d values into the first heap", len(other))
            self.meld(other)
            return self
        if second_ok:
            logger.debug("merge: re-inserting %d values into the second heap", len(self))
            other.meld(self)
            return other

        logger.debug("merge: rebuilding %d values under %s", len(self) + len(other), new_heap_type.value)
        result: BinomialHeap[T] = BinomialHeap(new_heap_type)
        result.meld(other)
        result.meld(self)
        return result

    def copy(self) -> BinomialHeap[T]:
        """Return a structurally independent clone (values are shared)."""
        trees = [None if t is None else t.copy() for t in self._trees]
        return BinomialHeap._from_trees(self._h_type, trees, self._length)

    __copy__ = copy

    def to_list(self) -> List[T]:
        """Flatten the forest in ascending rank order, each tree in pre-order."""
        out: List[T] = []
        for tree in self._trees:
            if tree is not None:
                tree.fill_list(out)
        return out

    def check_invariants(self) -> None:
        """Raise AssertionError if the forest or any tree is malformed."""
        total = 0
        for i, tree in enumerate(self._trees):
            if tree is None:
                continue
            if tree.rank != i:
                raise AssertionError(f"slot {i} holds a tree of rank {tree.rank}")
            total += 1 << i
            stack = [tree]
            while stack:
                node = stack.pop()
                if len(node.subtrees) != node.rank:
                    raise AssertionError(f"rank {node.rank} node has {len(node.subtrees)} subtrees")
                for r, sub in enumerate(node.subtrees):
                    if sub.rank != r:
                        raise AssertionError(f"subtree {r} has rank {sub.rank}")
                    if self._h_type.is_correct(sub.value, node.value):
                        raise AssertionError(f"{sub.value!r} outranks its parent {node.value!r}")
                    stack.append(sub)
        if total != self._length:
            raise AssertionError(f"length {self._length} but trees hold {total}")
        if self._length:
            best = self._trees[self._pointer]
            if best is None:
                raise AssertionError("best-root pointer targets an empty slot")
            for tree in self._trees:
                if tree is not None and self._h_type.is_correct(tree.value, best.value):
                    raise AssertionError(f"root {tree.value!r} beats the pointed-at root {best.value!r}")

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BinomialHeap({self._h_type.value}, {self.to_list()!r})"
