"""memtop - interactive memory-ranked process list."""

import logging
import sys
import time
from collections.abc import Callable
from enum import Enum
from typing import TextIO

from rich.console import Console

from memtop.config import Settings, configure_logging
from memtop.errors import TerminationError
from memtop.monitor import SnapshotCollector
from memtop.presenter import Presenter
from memtop.system import ProcessSource, PsutilProcessSource

logger = logging.getLogger(__name__)

MENU_PROMPT = "\nPress 1 to refresh the process list, 2 to terminate a process, or 0 to exit: "
PID_PROMPT = "Enter the PID of the process to terminate: "


class Command(Enum):
    """Menu commands, by the number the operator types."""

    EXIT = 0
    REFRESH = 1
    TERMINATE = 2


def parse_command(text: str) -> Command | None:
    """Map operator input to a Command, or None if it is not one."""
    try:
        return Command(int(text))
    except ValueError:
        return None


class CommandLoop:
    """
    Refresh/command loop.

    Each cycle clears the console, collects and renders a fresh process
    list, then reads and runs one command. Every command except refresh and
    exit is followed by a cooldown pause.
    """

    def __init__(
        self,
        console: Console,
        source: ProcessSource,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the CommandLoop.

        Args:
            console: Console to render to and prompt on.
            source: Process source used for listing and termination.
            settings: Session settings. Defaults to Settings().
            sleep: Called with the cooldown in seconds.
            stream: Read input from this stream instead of stdin.
        """
        self._console = console
        self._source = source
        self._settings = settings or Settings()
        self._sleep = sleep
        self._stream = stream
        self._collector = SnapshotCollector(source)
        self._presenter = Presenter(console, name_width=self._settings.name_width)

    def run(self) -> int:
        """Run cycles until the operator exits. Returns the exit code."""
        while self.step():
            pass
        return 0

    def step(self) -> bool:
        """Run one refresh/command cycle. Returns False when the loop should end."""
        self._console.clear()
        index = self._collector.collect()
        self._presenter.render(index.descending(), hidden=self._collector.skipped)

        try:
            command = parse_command(self._ask(MENU_PROMPT))
        except (EOFError, KeyboardInterrupt):
            command = Command.EXIT

        if command is Command.EXIT:
            return False
        if command is Command.REFRESH:
            return True

        if command is Command.TERMINATE:
            try:
                self._terminate(self._ask(PID_PROMPT))
            except (EOFError, KeyboardInterrupt):
                return False
        else:
            self._console.print("Invalid option. Try again.", style="yellow", markup=False)

        self._sleep(self._settings.cooldown)
        return True

    def _terminate(self, text: str) -> None:
        """Terminate the PID typed by the operator and report the outcome."""
        try:
            pid = int(text)
        except ValueError:
            self._console.print(f"Invalid PID: {text!r}", style="yellow", markup=False)
            return

        try:
            self._source.terminate(pid)
        except TerminationError as exc:
            logger.info("Termination of PID %d failed: %s", pid, exc.reason)
            self._console.print(
                f"Failed to terminate process with PID: {pid} ({exc.reason})",
                style="red",
                markup=False,
            )
        else:
            logger.info("Terminated PID %d", pid)
            self._console.print(
                f"Process with PID: {pid} terminated successfully.",
                style="green",
                markup=False,
            )

    def _ask(self, prompt: str) -> str:
        """Prompt for one line of input; raises EOFError when input runs out."""
        line = self._console.input(prompt, markup=False, stream=self._stream)
        if self._stream is not None and not line:
            raise EOFError
        return line.strip()


def main() -> None:
    """Entry point for memtop."""
    settings = Settings()
    configure_logging(settings.log_level)
    console = Console()
    loop = CommandLoop(console, PsutilProcessSource(force_kill=settings.force_kill), settings)
    sys.exit(loop.run())


if __name__ == "__main__":
    main()
