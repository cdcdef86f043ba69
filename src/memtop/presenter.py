"""Console rendering of the process list."""

from collections.abc import Iterable

from rich.cells import set_cell_size
from rich.console import Console

from memtop.models import ProcessRecord

PID_WIDTH = 8
MEMORY_WIDTH = 12
MEMORY_UNIT = " KB"


def format_kilobytes(memory_bytes: int) -> str:
    """Format bytes as a right-aligned whole number of kilobytes."""
    return f"{memory_bytes // 1024:>{MEMORY_WIDTH}}{MEMORY_UNIT}"


def fit(text: str, width: int) -> str:
    """Pad or truncate text to exactly ``width`` terminal cells."""
    return set_cell_size(text, width)


class Presenter:
    """Writes a memory-sorted process table to a rich Console."""

    def __init__(self, console: Console, name_width: int = 35) -> None:
        """
        Initialize the Presenter.

        Args:
            console: Where output goes.
            name_width: Width of the process name column, in terminal cells.
        """
        self._console = console
        self._name_width = name_width

    @property
    def row_width(self) -> int:
        """Width of every table row in terminal cells."""
        return PID_WIDTH + self._name_width + MEMORY_WIDTH + len(MEMORY_UNIT)

    def render(self, records: Iterable[ProcessRecord], hidden: int = 0) -> int:
        """
        Print one row per record, in the order given.

        Prints a "no processes" message instead of a table when ``records``
        is empty. Returns the number of rows printed.
        """
        rows = 0
        for record in records:
            if rows == 0:
                self._header()
            self._line(
                f"{record.pid:<{PID_WIDTH}}"
                f"{fit(record.name, self._name_width)}"
                f"{format_kilobytes(record.memory_bytes)}"
            )
            rows += 1

        if rows == 0:
            self._line("No processes found.")
        elif hidden:
            self._console.print(
                f"\n{hidden} processes hidden (memory information unavailable)",
                style="dim",
                markup=False,
                highlight=False,
            )
        return rows

    def _header(self) -> None:
        """Print the column titles and the separator line."""
        self._line(
            f"{'PID':<{PID_WIDTH}}"
            f"{fit('Process Name', self._name_width)}"
            f"{'Memory':>{MEMORY_WIDTH + len(MEMORY_UNIT)}}"
        )
        self._line("-" * self.row_width)

    def _line(self, text: str) -> None:
        """Print one line verbatim."""
        # Process names may contain "[", so markup stays off
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)
