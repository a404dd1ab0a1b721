"""
Handler registry.

Holds the handler the Monitor currently calls plus a single-slot mailbox for
a replacement. Writers (Monitor.set, any thread) only ever touch the mailbox,
so they never wait on the monitor loop; the loop promotes the pending handler
when it next scans.
"""

import threading
from collections.abc import Callable

from .slot import Slot
from .state import State

HandlerFunc = Callable[[State], None]


def _noop(state: State) -> None:
    pass


def filter_handler(fn: HandlerFunc | None) -> HandlerFunc:
    """Return fn, or the internal no-op handler when fn is None."""
    return fn if fn is not None else _noop


def is_noop(fn: HandlerFunc) -> bool:
    """Check if fn is the internal no-op handler."""
    return fn is _noop


class HandlerRegistry:
    """
    Current handler plus a capacity-1 pending replacement.

    get() never returns None: a None handler is stored as a no-op, so "no
    handler configured" and "handler that does nothing" behave the same.
    """

    def __init__(
        self, fn: HandlerFunc | None = None, cond: threading.Condition | None = None
    ) -> None:
        """
        Initialize the registry.

        Args:
            fn: Initial handler (None means no-op)
            cond: Condition the pending mailbox notifies (shared with the Monitor)
        """
        self._lock = threading.Lock()
        self._fn = filter_handler(fn)
        self._pending: Slot[HandlerFunc] = Slot(cond)

    def load(self, fn: HandlerFunc | None) -> None:
        """Queue fn as the next handler, replacing any not yet promoted."""
        self._pending.put(filter_handler(fn))

    def pending(self) -> Slot[HandlerFunc]:
        """Mailbox holding the pending replacement."""
        return self._pending

    def promote(self) -> bool:
        """
        Make the pending handler current.

        Returns:
            bool: True if a pending handler was promoted
        """
        fn = self._pending.take()
        if fn is None:
            return False
        self.set(fn)
        return True

    def set(self, fn: HandlerFunc | None) -> None:
        """Replace the current handler directly."""
        with self._lock:
            self._fn = filter_handler(fn)

    def get(self) -> HandlerFunc:
        """Return the current handler."""
        with self._lock:
            return self._fn
