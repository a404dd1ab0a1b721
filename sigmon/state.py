"""Per-dispatch snapshot handed to the handler."""

from dataclasses import dataclass

from .signals import Signal


@dataclass(frozen=True)
class State:
    """
    Immutable snapshot of one dispatched signal.

    A blank State (signal is None) stands for "no signal yet" and is what
    Monitor.state() returns before the first dispatch.
    """

    signal: Signal | None = None

    def is_blank(self) -> bool:
        """Check if this state predates any dispatched signal."""
        return self.signal is None


BLANK_STATE = State()
