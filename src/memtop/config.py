"""Runtime settings and logging setup for memtop."""

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler


@dataclass(slots=True, frozen=True)
class Settings:
    """
    Tunable defaults for a memtop session.

    The console command always runs with the defaults; the fields exist so
    that code embedding CommandLoop (and the tests) can change them.
    Out-of-range numbers are clamped rather than rejected.
    """

    cooldown: float = 3.0  # Seconds to pause after most commands
    force_kill: bool = False
    name_width: int = 35
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Clamp cooldown to at least 0 and name_width to at least 1."""
        if self.cooldown < 0:
            object.__setattr__(self, "cooldown", 0.0)
        if self.name_width < 1:
            object.__setattr__(self, "name_width", 1)


def configure_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """
    Send memtop log records to stderr through rich.

    Calling it again replaces the handler instead of adding a second one.
    """
    logger = logging.getLogger("memtop")
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
