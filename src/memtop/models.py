"""Data models for memtop."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable snapshot of one process and its resident memory."""

    pid: int
    name: str
    memory_bytes: int  # Resident set size, never 0 once indexed

    @property
    def sort_key(self) -> tuple[int, int]:
        """Ordering key: memory first, PID as tie-breaker."""
        return (self.memory_bytes, self.pid)


def decode_name(name: str | bytes | None) -> str:
    """Return a process name as text, replacing bytes that are not valid UTF-8."""
    if name is None:
        return ""
    if isinstance(name, bytes):
        return name.decode("utf-8", errors="replace")
    return name
