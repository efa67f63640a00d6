import random

import pytest

from priority_queues.datastructures import BinomialHeap, BinomialTree, HeapType, MergeBucket


def occupied_slots(heap):
    return [i for i, t in enumerate(heap._trees) if t is not None]


def test_push_pop_example():
    h = BinomialHeap(HeapType.MIN)
    for v in (2, 5, 1, 6):
        h.push(v)
    assert [h.pop() for _ in range(4)] == [1, 2, 5, 6]
    assert h.pop() is None


def test_empty_heap_reports_absence_repeatedly():
    h = BinomialHeap(HeapType.MAX)
    for _ in range(3):
        assert h.peek() is None
        assert h.pop() is None
    assert len(h) == 0
    assert h.is_empty()
    assert not h


@pytest.mark.parametrize("heap_type", [HeapType.MIN, HeapType.MAX])
@pytest.mark.parametrize("n", [0, 1, 2, 17, 1000])
def test_round_trip_returns_sorted_values(heap_type, n):
    rng = random.Random(n)
    values = [rng.randint(-50, 50) for _ in range(n)]
    h = BinomialHeap(heap_type)
    for v in values:
        h.push(v)
    assert len(h) == n
    h.check_invariants()

    out = list(h.drain())
    assert out == sorted(values, reverse=heap_type is HeapType.MAX)
    assert h.pop() is None


def test_forest_mirrors_binary_length():
    h = BinomialHeap(HeapType.MIN, range(13))
    # 13 == 0b1101
    assert occupied_slots(h) == [0, 2, 3]
    h.check_invariants()


def test_pop_explodes_tree_into_lower_ranks():
    h = BinomialHeap(HeapType.MIN, range(8))
    assert occupied_slots(h) == [3]
    assert h.pop() == 0
    assert len(h) == 7
    assert occupied_slots(h) == [0, 1, 2]
    assert len(h._trees) == 3
    h.check_invariants()


def test_meld_conserves_length_and_empties_donor():
    a = BinomialHeap(HeapType.MIN, [9, 4, 7, 1, 8, 3, 3, 10, 2, 6])
    b = BinomialHeap(HeapType.MIN, [5, 0, 11, 12, 4, 13, 14])
    a.meld(b)

    assert len(a) == 17
    assert len(b) == 0
    assert b.peek() is None
    assert b.to_list() == []
    assert a.peek() == 0
    a.check_invariants()


def test_meld_with_itself_is_a_no_op():
    h = BinomialHeap(HeapType.MIN, [3, 1, 2])
    h.meld(h)
    assert len(h) == 3
    assert list(h.drain()) == [1, 2, 3]


def test_meld_across_policies_reinserts_values():
    heap1 = BinomialHeap(HeapType.MAX, [4, 7])
    heap2 = BinomialHeap(HeapType.MIN, [5, 2])
    heap1.meld(heap2)

    assert [heap1.pop() for _ in range(4)] == [7, 5, 4, 2]
    assert heap2.peek() is None
    assert len(heap2) == 0


def test_cross_policy_merge_on_clones_keeps_originals():
    first = BinomialHeap(HeapType.MIN, [2, 5, 4])
    second = BinomialHeap(HeapType.MIN, [1, 3, 6, 9, 8, 11])

    merged = first.copy().merge(second.copy(), HeapType.MAX)

    assert merged.heap_type is HeapType.MAX
    assert merged.peek() == 11
    assert first.peek() == 2
    assert second.peek() == 1
    assert list(merged.drain()) == [11, 9, 8, 6, 5, 4, 3, 2, 1]
    assert len(first) == 3
    assert len(second) == 6


def test_merge_same_policy_melds_into_self():
    a = BinomialHeap(HeapType.MIN, [3, 1])
    b = BinomialHeap(HeapType.MIN, [2])
    result = a.merge(b, HeapType.MIN)
    assert result is a
    assert len(b) == 0
    assert list(result.drain()) == [1, 2, 3]


def test_merge_keeps_first_when_only_it_matches():
    a = BinomialHeap(HeapType.MAX, [3, 1])
    b = BinomialHeap(HeapType.MIN, [2, 8])
    result = a.merge(b, HeapType.MAX)
    assert result is a
    assert b.is_empty()
    assert list(result.drain()) == [8, 3, 2, 1]


def test_merge_returns_second_when_only_it_matches():
    a = BinomialHeap(HeapType.MIN, [3, 1])
    b = BinomialHeap(HeapType.MAX, [2, 8])
    result = a.merge(b, HeapType.MAX)
    assert result is b
    assert a.is_empty()
    assert list(result.drain()) == [8, 3, 2, 1]


def test_merge_builds_fresh_heap_when_neither_matches():
    a = BinomialHeap(HeapType.MIN, [3, 1])
    b = BinomialHeap(HeapType.MIN, [2, 8])
    result = a.merge(b, HeapType.MAX)
    assert result is not a and result is not b
    assert a.is_empty() and b.is_empty()
    assert result.heap_type is HeapType.MAX
    result.check_invariants()
    assert list(result.drain()) == [8, 3, 2, 1]


def best_of(model, heap_type):
    if not model:
        return None
    return min(model) if heap_type is HeapType.MIN else max(model)


@pytest.mark.parametrize("heap_type", [HeapType.MIN, HeapType.MAX])
def test_random_operations_keep_invariants(heap_type):
    rng = random.Random(7)
    policies = [HeapType.MIN, HeapType.MAX]
    h = BinomialHeap(heap_type)
    model = []
    for _ in range(400):
        op = rng.random()
        if op < 0.45:
            v = rng.randint(0, 30)
            h.push(v)
            model.append(v)
        elif op < 0.75:
            expected = best_of(model, h.heap_type)
            assert h.pop() == expected
            if model:
                model.remove(expected)
        elif op < 0.9:
            extra = [rng.randint(0, 30) for _ in range(rng.randint(0, 9))]
            other = BinomialHeap(rng.choice(policies), extra)
            h.meld(other)
            model.extend(extra)
            assert len(other) == 0
        else:
            extra = [rng.randint(0, 30) for _ in range(rng.randint(0, 9))]
            other = BinomialHeap(rng.choice(policies), extra)
            inputs = (h, other)
            h = h.merge(other, rng.choice(policies))
            model.extend(extra)
            for heap in inputs:
                if heap is not h:
                    assert heap.is_empty()
        h.check_invariants()
        assert len(h) == len(model)
        assert h.peek() == best_of(model, h.heap_type)

    assert list(h.drain()) == sorted(model, reverse=h.heap_type is HeapType.MAX)


def test_check_invariants_rejects_out_of_order_values():
    h = BinomialHeap(HeapType.MIN, [1, 2, 3, 4])
    assert occupied_slots(h) == [2]
    h._trees[2].value = 99
    with pytest.raises(AssertionError):
        h.check_invariants()


def test_check_invariants_rejects_wrong_rank():
    h = BinomialHeap(HeapType.MIN, [1, 2, 3, 4])
    h._trees[2].rank = 1
    with pytest.raises(AssertionError):
        h.check_invariants()


def test_check_invariants_rejects_stale_pointer():
    h = BinomialHeap(HeapType.MIN, [0, 1, 2])
    assert occupied_slots(h) == [0, 1]
    assert h._pointer == 1
    h._pointer = 0
    with pytest.raises(AssertionError):
        h.check_invariants()



def test_pointer_ties_prefer_lowest_rank():
    h = BinomialHeap(HeapType.MIN, [1, 1, 1])
    assert occupied_slots(h) == [0, 1]
    assert h._pointer == 0
    assert h.peek() == 1


def test_copy_is_independent():
    h = BinomialHeap(HeapType.MAX, [5, 3, 9, 1])
    clone = h.copy()
    assert clone.pop() == 9
    assert clone.pop() == 5
    assert len(h) == 4
    assert h.peek() == 9
    h.check_invariants()
    clone.check_invariants()


def test_min_and_max_constructors_accept_iterables():
    words = ["pear", "apple", "fig", "kiwi"]
    assert list(BinomialHeap.min_heap(words).drain()) == sorted(words)
    assert list(BinomialHeap.max_heap(words).drain()) == sorted(words, reverse=True)


def test_to_list_holds_every_value():
    values = [4, 4, 1, 9, 0, 2]
    h = BinomialHeap(HeapType.MIN, values)
    assert sorted(h.to_list()) == sorted(values)


def test_rejects_non_policy_heap_type():
    with pytest.raises(TypeError):
        BinomialHeap("min")


def test_merge_trees_links_loser_under_winner():
    winner = BinomialTree.merge_trees(BinomialTree(3), BinomialTree(1), HeapType.MIN)
    assert winner.value == 1
    assert winner.rank == 1
    assert [t.value for t in winner.subtrees] == [3]


def test_merge_trees_equal_roots_promote_second():
    first, second = BinomialTree(5), BinomialTree(5)
    assert BinomialTree.merge_trees(first, second, HeapType.MAX) is second


def test_merge_trees_rank_mismatch_is_an_assertion():
    big = BinomialTree.merge_trees(BinomialTree(1), BinomialTree(2), HeapType.MIN)
    with pytest.raises(AssertionError):
        BinomialTree.merge_trees(big, BinomialTree(0), HeapType.MIN)


def test_merge_bucket_is_lifo_and_bounded():
    bucket = MergeBucket()
    trees = [BinomialTree(v) for v in (1, 2, 3)]
    for t in trees:
        bucket.push(t)
    assert len(bucket) == 3
    with pytest.raises(AssertionError):
        bucket.push(BinomialTree(4))
    assert [bucket.pop().value for _ in range(3)] == [3, 2, 1]
    assert bucket.pop() is None
