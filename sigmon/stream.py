"""
Merged signal stream.

The Junction's fan-in thread writes every notification here and the Monitor
reads them back in arrival order. Buffering is one pending notification per
signal kind: while a kind is queued and not yet taken, further notifications
of that kind are dropped.
"""

import collections
import threading

from .signals import Signal


class SignalStream:
    """
    FIFO of Signals with per-kind coalescing.

    Like Slot, the stream notifies a (possibly shared) threading.Condition on
    every accepted write.
    """

    def __init__(self, cond: threading.Condition | None = None) -> None:
        self._cond = cond if cond is not None else threading.Condition()
        self._queue: collections.deque[Signal] = collections.deque()
        self._queued: set[Signal] = set()
        self._dropped = 0

    @property
    def cond(self) -> threading.Condition:
        """Condition notified whenever a signal is accepted."""
        return self._cond

    @property
    def dropped(self) -> int:
        """Number of notifications coalesced away since creation."""
        with self._cond:
            return self._dropped

    def put(self, sig: Signal) -> bool:
        """
        Queue sig unless one of its kind is already waiting.

        Returns:
            bool: True if queued, False if coalesced into the pending one
        """
        with self._cond:
            if sig in self._queued:
                self._dropped += 1
                return False
            self._queue.append(sig)
            self._queued.add(sig)
            self._cond.notify_all()
            return True

    def take(self) -> Signal | None:
        """Remove and return the oldest signal, or None if the stream is empty."""
        with self._cond:
            if not self._queue:
                return None
            sig = self._queue.popleft()
            self._queued.discard(sig)
            return sig

    def get(self, timeout: float | None = None) -> Signal | None:
        """
        Blocking take.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            The oldest signal, or None on timeout
        """
        with self._cond:
            if not self._cond.wait_for(lambda: bool(self._queue), timeout=timeout):
                return None
            return self.take()

    def ready(self) -> bool:
        """Check if a signal is waiting."""
        with self._cond:
            return bool(self._queue)

    def clear(self) -> None:
        """Discard every queued signal."""
        with self._cond:
            self._queue.clear()
            self._queued.clear()

    def __len__(self) -> int:
        with self._cond:
            return len(self._queue)
