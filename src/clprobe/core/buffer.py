from __future__ import annotations

import logging

from clprobe.core.errors import OutOfMemoryError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1024


class ScratchBuffer:
    """Growable scratch space shared by every variable-length query of a run.

    Contents are never valid across queries, so growth allocates a fresh
    buffer instead of copying. Capacity never shrinks.
    """

    def __init__(self, initial: int = DEFAULT_CAPACITY) -> None:
        self.data = bytearray()
        self.reallocations = 0
        self.ensure_capacity(initial, "scratch buffer")

    @property
    def capacity(self) -> int:
        return len(self.data)

    def ensure_capacity(self, size: int, what: str = "scratch buffer") -> bytearray:
        if size > len(self.data):
            try:
                self.data = bytearray(size)
            except MemoryError as exc:
                raise OutOfMemoryError(what) from exc
            self.reallocations += 1
            logger.debug("scratch buffer grown to %d bytes for %s", size, what)
        return self.data
