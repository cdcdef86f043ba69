"""Snapshot collection for memtop."""

import logging

from memtop.errors import SnapshotError
from memtop.index import OrderedIndex
from memtop.models import ProcessRecord, decode_name
from memtop.system import ProcessEntry, ProcessSource

logger = logging.getLogger(__name__)


class SnapshotCollector:
    """
    Builds one OrderedIndex per refresh from a ProcessSource.

    Processes whose memory cannot be read (protected, exited mid-refresh)
    are left out of the index rather than shown with zero memory.
    """

    def __init__(self, source: ProcessSource) -> None:
        """
        Initialize the SnapshotCollector.

        Args:
            source: Where process listings and memory figures come from.
        """
        self._source = source
        self.skipped = 0

    def collect(self) -> OrderedIndex:
        """Enumerate processes and return them indexed by memory usage."""
        index = OrderedIndex()
        self.skipped = 0

        try:
            with self._source.open_snapshot() as snapshot:
                entry = snapshot.first()
                if entry is None:
                    logger.error("Process snapshot is empty; could not read the first process")
                    return index

                while entry is not None:
                    self._add_entry(index, entry)
                    entry = snapshot.next()
        except SnapshotError as exc:
            logger.error("Failed to create process snapshot: %s", exc)
            return index

        logger.debug("Indexed %d processes, skipped %d", len(index), self.skipped)
        return index

    def _add_entry(self, index: OrderedIndex, entry: ProcessEntry) -> None:
        memory = self._source.memory_footprint(entry.pid)
        if memory <= 0:
            logger.debug("No memory information for PID %d, skipping", entry.pid)
            self.skipped += 1
            return

        record = ProcessRecord(pid=entry.pid, name=decode_name(entry.name), memory_bytes=memory)
        if not index.insert(record):
            logger.debug("Duplicate entry for PID %d ignored", entry.pid)
