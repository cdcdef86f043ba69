"""Shared fixtures for memtop tests."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from memtop.errors import SnapshotError, TerminationError
from memtop.system import ProcessEntry, Snapshot


class FakeProcessSource:
    """In-memory ProcessSource that records how it is used."""

    def __init__(
        self,
        entries: list[ProcessEntry] | None = None,
        memory: dict[int, int] | None = None,
        fail_open: bool = False,
        terminate_errors: dict[int, str] | None = None,
    ) -> None:
        self.entries = entries or []
        self.memory = memory or {}
        self.fail_open = fail_open
        self.terminate_errors = terminate_errors or {}
        self.opened = 0
        self.released = 0
        self.queried: list[int] = []
        self.terminated: list[int] = []
        self.snapshots: list[Snapshot] = []

    @contextmanager
    def open_snapshot(self) -> Iterator[Snapshot]:
        if self.fail_open:
            raise SnapshotError("snapshot unavailable")
        self.opened += 1
        snapshot = Snapshot(list(self.entries))
        self.snapshots.append(snapshot)
        try:
            yield snapshot
        finally:
            snapshot.release()
            self.released += 1

    def memory_footprint(self, pid: int) -> int:
        self.queried.append(pid)
        return self.memory.get(pid, 0)

    def terminate(self, pid: int) -> None:
        self.terminated.append(pid)
        if pid in self.terminate_errors:
            raise TerminationError(pid, self.terminate_errors[pid])


@pytest.fixture
def fake_source() -> FakeProcessSource:
    """A source with three queryable processes and one protected one."""
    return FakeProcessSource(
        entries=[
            ProcessEntry(pid=1, name="init"),
            ProcessEntry(pid=10, name="editor"),
            ProcessEntry(pid=20, name="browser"),
            ProcessEntry(pid=5, name="shell"),
        ],
        memory={10: 500 * 1024, 20: 1000 * 1024, 5: 500 * 1024},
    )
