"""Tests for the OrderedIndex."""

import random

from memtop.index import OrderedIndex
from memtop.models import ProcessRecord


def record(pid: int, memory: int, name: str = "proc") -> ProcessRecord:
    """Build a ProcessRecord for tests."""
    return ProcessRecord(pid=pid, name=name, memory_bytes=memory)


def keys(index: OrderedIndex) -> list[tuple[int, int]]:
    """Descending (pid, memory) pairs of an index."""
    return [(r.pid, r.memory_bytes) for r in index.descending()]


class TestOrderedIndex:
    """Tests for OrderedIndex."""

    def test_empty_index(self):
        """Test an empty index yields nothing."""
        index = OrderedIndex()

        assert len(index) == 0
        assert not index
        assert list(index.descending()) == []

    def test_descending_order_with_memory_tie(self):
        """Test equal memory is broken by PID, then the whole order reversed."""
        index = OrderedIndex()
        index.insert(record(10, 500))
        index.insert(record(20, 1000))
        index.insert(record(5, 500))

        assert keys(index) == [(20, 1000), (10, 500), (5, 500)]

    def test_insert_returns_true_for_new_key(self):
        """Test insert reports a stored record."""
        index = OrderedIndex()

        assert index.insert(record(1, 100)) is True
        assert index.insert(record(2, 100)) is True
        assert len(index) == 2

    def test_duplicate_keeps_first(self):
        """Test inserting the same (memory, pid) twice keeps only the first."""
        index = OrderedIndex()
        first = record(7, 4096, name="first")
        second = record(7, 4096, name="second")

        assert index.insert(first) is True
        assert index.insert(second) is False

        assert len(index) == 1
        assert list(index.descending()) == [first]

    def test_same_pid_different_memory_is_not_duplicate(self):
        """Test only the full key counts as a duplicate."""
        index = OrderedIndex()
        index.insert(record(7, 4096))
        index.insert(record(7, 8192))

        assert keys(index) == [(7, 8192), (7, 4096)]

    def test_descending_is_fresh_per_call(self):
        """Test each descending() call starts a new traversal."""
        index = OrderedIndex()
        for pid in range(5):
            index.insert(record(pid, pid * 10 + 1))

        first_pass = list(index.descending())
        second_pass = list(index.descending())

        assert first_pass == second_pass
        assert len(first_pass) == 5

    def test_descending_is_lazy(self):
        """Test descending() yields records one at a time."""
        index = OrderedIndex()
        index.insert(record(1, 100))
        index.insert(record(2, 200))

        walk = index.descending()
        assert next(walk).pid == 2
        assert next(walk).pid == 1

    def test_monotonic_insertion_does_not_recurse(self):
        """Test a fully degenerate tree is walked without hitting the recursion limit."""
        index = OrderedIndex()
        count = 5000
        for pid in range(count):
            index.insert(record(pid, (pid + 1) * 1024))

        result = list(index.descending())

        assert len(result) == count
        assert result[0].pid == count - 1
        assert result[-1].pid == 0

    def test_random_order_matches_sorted(self):
        """Test arbitrary insertion order gives the reverse of tuple ordering."""
        rng = random.Random(1234)
        records = [record(pid, rng.randint(1, 50) * 1024) for pid in range(1, 400)]
        rng.shuffle(records)

        index = OrderedIndex()
        for item in records:
            index.insert(item)

        expected = sorted(records, key=lambda r: (r.memory_bytes, r.pid), reverse=True)
        assert list(index.descending()) == expected
