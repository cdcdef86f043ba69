"""Memory-ordered index of process records."""

from collections.abc import Iterator

from memtop.models import ProcessRecord

_NIL = -1


class OrderedIndex:
    """
    Binary search tree of ProcessRecords keyed on (memory_bytes, pid).

    Nodes live in an arena of parallel lists: node ``i`` holds ``_records[i]``
    and the arena positions of its lower and higher subtrees. The tree is not
    rebalanced; insert and traversal are iterative so that a degenerate
    (monotonic) insertion order cannot exhaust the recursion limit.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._records: list[ProcessRecord] = []
        self._lower: list[int] = []
        self._higher: list[int] = []

    def __len__(self) -> int:
        """Number of records stored."""
        return len(self._records)

    def __bool__(self) -> bool:
        """Whether any record is stored."""
        return bool(self._records)

    def insert(self, record: ProcessRecord) -> bool:
        """
        Insert a record.

        Returns False, leaving the index untouched, when a record with the
        same (memory_bytes, pid) is already stored.
        """
        if not self._records:
            self._append(record)
            return True

        key = record.sort_key
        node = 0
        while True:
            node_key = self._records[node].sort_key
            if key < node_key:
                child = self._lower[node]
                if child == _NIL:
                    self._lower[node] = self._append(record)
                    return True
            elif key > node_key:
                child = self._higher[node]
                if child == _NIL:
                    self._higher[node] = self._append(record)
                    return True
            else:
                return False
            node = child

    def descending(self) -> Iterator[ProcessRecord]:
        """Yield every record once, highest memory first (reverse in-order walk)."""
        stack: list[int] = []
        node = 0 if self._records else _NIL
        while stack or node != _NIL:
            while node != _NIL:
                stack.append(node)
                node = self._higher[node]
            node = stack.pop()
            yield self._records[node]
            node = self._lower[node]

    def _append(self, record: ProcessRecord) -> int:
        """Add a leaf node to the arena and return its position."""
        self._records.append(record)
        self._lower.append(_NIL)
        self._higher.append(_NIL)
        return len(self._records) - 1
