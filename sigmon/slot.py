"""
Single-slot overwrite buffer.

A Slot holds at most one value. Writing never blocks: a new value replaces
any value that has not been taken yet, so the last write before the next read
wins. Slots are built on a threading.Condition that can be shared with other
buffers, which lets one consumer wait for "any of them is ready" with a
single wait.
"""

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class Slot(Generic[T]):
    """
    Capacity-1 mailbox with drain-then-replace writes.

    Example:
        slot: Slot[str] = Slot()
        slot.put("a")
        slot.put("b")
        slot.take()  # -> "b"
        slot.take()  # -> None
    """

    def __init__(self, cond: threading.Condition | None = None) -> None:
        """
        Initialize an empty slot.

        Args:
            cond: Condition to notify on writes. Share one condition between
                  several slots or streams to wait on all of them at once.
                  Its lock must be re-entrant, which is the default.
        """
        self._cond = cond if cond is not None else threading.Condition()
        self._value: T | None = None
        self._full = False

    @property
    def cond(self) -> threading.Condition:
        """Condition notified whenever a value is written."""
        return self._cond

    def put(self, value: T) -> None:
        """Store value, discarding any value not yet taken."""
        with self._cond:
            self._value = value
            self._full = True
            self._cond.notify_all()

    def take(self) -> T | None:
        """Remove and return the stored value, or None if the slot is empty."""
        with self._cond:
            if not self._full:
                return None
            value = self._value
            self._value = None
            self._full = False
            return value

    def ready(self) -> bool:
        """Check if a value is waiting to be taken."""
        with self._cond:
            return self._full

    def clear(self) -> None:
        """Discard any stored value."""
        with self._cond:
            self._value = None
            self._full = False

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until a value is stored.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            bool: True if a value is ready, False on timeout
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._full, timeout=timeout)
