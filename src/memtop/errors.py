"""Exceptions raised by memtop."""


class MemtopError(Exception):
    """Base class for memtop errors."""


class SnapshotError(MemtopError):
    """Raised when the process enumeration cannot be acquired."""


class TerminationError(MemtopError):
    """Raised when a process could not be terminated."""

    def __init__(self, pid: int, reason: str) -> None:
        super().__init__(f"cannot terminate PID {pid}: {reason}")
        self.pid = pid
        self.reason = reason
