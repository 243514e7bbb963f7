"""Hand-off from the audio thread to the presentation layer.

The audio thread only ever tries a lock without blocking. If the
presentation layer is holding it, the write is dropped; the next pass
publishes a fresher value anyway.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteSnapshot:
    """Notes of the most recently published pass."""

    notes: Tuple[str, ...] = ()
    pass_index: int = 0


class NoteMailbox:
    """Single-slot, latest-value mailbox for detected notes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = NoteSnapshot()
        self.dropped = 0

    def publish(self, notes: Sequence[str], pass_index: int) -> bool:
        """
        Replace the current snapshot without waiting.

        Returns:
            True if stored, False if a reader held the lock
        """
        if not self._lock.acquire(blocking=False):
            self.dropped += 1
            return False
        try:
            self._snapshot = NoteSnapshot(notes=tuple(notes), pass_index=pass_index)
        finally:
            self._lock.release()
        return True

    def snapshot(self) -> NoteSnapshot:
        """Copy of the latest snapshot."""
        with self._lock:
            return self._snapshot


class DiagnosticLog:
    """Small bounded text log shown alongside the notes.

    Lines are also sent to the module logger, at INFO unless the caller
    passes another level. The audio thread writes at DEBUG.
    """

    def __init__(self, maxlen: int = 32):
        self._lock = threading.Lock()
        self._lines = deque(maxlen=maxlen)

    def write(self, line: str, level: int = logging.INFO) -> None:
        logger.log(level, line)
        if not self._lock.acquire(blocking=False):
            return
        try:
            self._lines.append(line)
        finally:
            self._lock.release()

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
