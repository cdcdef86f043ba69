"""Operating system access for memtop, backed by psutil."""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from typing import Protocol

import psutil

from memtop.errors import SnapshotError, TerminationError


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """One row of a process enumeration, before memory is resolved."""

    pid: int
    name: str | bytes


class Snapshot:
    """
    Point-in-time listing of running processes, read entry by entry.

    ``first()`` rewinds to the start; ``next()`` advances. Both return None
    once there are no more entries.
    """

    def __init__(self, entries: list[ProcessEntry]) -> None:
        """
        Initialize the Snapshot.

        Args:
            entries: The processes captured when the snapshot was opened.
        """
        self._entries: list[ProcessEntry] | None = entries
        self._position = 0

    @property
    def released(self) -> bool:
        """Whether release() has been called."""
        return self._entries is None

    def first(self) -> ProcessEntry | None:
        """Return the first entry, or None for an empty listing."""
        self._position = 0
        return self._current()

    def next(self) -> ProcessEntry | None:
        """Return the entry after the last one returned, or None when exhausted."""
        self._position += 1
        return self._current()

    def release(self) -> None:
        """Drop the captured entries. A snapshot can only be released once."""
        if self._entries is None:
            raise RuntimeError("snapshot already released")
        self._entries = None

    def _current(self) -> ProcessEntry | None:
        """Return the entry at the cursor, or None past the end."""
        if self._entries is None:
            raise RuntimeError("snapshot used after release")
        if self._position < len(self._entries):
            return self._entries[self._position]
        return None


class ProcessSource(Protocol):
    """The process-management operations memtop needs from the OS."""

    def open_snapshot(self) -> AbstractContextManager[Snapshot]:
        """Acquire a process enumeration; raises SnapshotError on failure."""
        ...

    def memory_footprint(self, pid: int) -> int:
        """Resident memory of ``pid`` in bytes, 0 when it cannot be queried."""
        ...

    def terminate(self, pid: int) -> None:
        """Terminate ``pid``; raises TerminationError on failure."""
        ...


class PsutilProcessSource:
    """
    ProcessSource implementation using psutil.

    Handles NoSuchProcess, AccessDenied and ZombieProcess per process, so a
    process that vanishes or is protected never breaks a refresh.
    """

    def __init__(self, force_kill: bool = False) -> None:
        """
        Initialize the PsutilProcessSource.

        Args:
            force_kill: Use kill() (SIGKILL) instead of terminate() (SIGTERM).
                On Windows both end in TerminateProcess.
        """
        self._force_kill = force_kill

    @property
    def force_kill(self) -> bool:
        """Whether terminate() sends a kill instead of a terminate request."""
        return self._force_kill

    @contextmanager
    def open_snapshot(self) -> Iterator[Snapshot]:
        """Capture the current process list; the snapshot is released on exit."""
        try:
            entries = [
                ProcessEntry(pid=proc.info["pid"], name=proc.info.get("name") or "")
                for proc in psutil.process_iter(attrs=["pid", "name"])
            ]
        except (psutil.Error, OSError) as exc:
            raise SnapshotError(f"cannot enumerate processes: {exc}") from exc

        snapshot = Snapshot(entries)
        try:
            yield snapshot
        finally:
            snapshot.release()

    def memory_footprint(self, pid: int) -> int:
        """Return the resident set size of ``pid``, or 0 if it is unavailable."""
        try:
            return psutil.Process(pid).memory_info().rss
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess, ValueError):
            # Process exited, is protected, or the PID is invalid
            return 0

    def terminate(self, pid: int) -> None:
        """Terminate ``pid``, raising TerminationError if it cannot be done."""
        try:
            proc = psutil.Process(pid)
            if self._force_kill:
                proc.kill()
            else:
                proc.terminate()
        except psutil.NoSuchProcess as exc:
            raise TerminationError(pid, "no such process") from exc
        except psutil.AccessDenied as exc:
            raise TerminationError(pid, "access denied") from exc
        except (psutil.Error, ValueError) as exc:
            raise TerminationError(pid, str(exc) or type(exc).__name__) from exc
