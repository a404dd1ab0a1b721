"""
OS signal subscription.

The Notifier is the boundary between sigmon and the interpreter's signal
machinery. It owns the process-wide disposition of every signal it has been
asked to watch and fans each delivery out to the callbacks subscribed to that
signal.

CPython constraints shape this module:

- signal.signal() may only be called from the main thread of the main
  interpreter, so installing the Notifier's handler must happen there.
- Python-level signal handlers always run on the main thread, between
  bytecodes, possibly while that thread holds arbitrary locks. Delivery
  callbacks therefore run in handler context and must be reentrant and
  lock-free (queue.SimpleQueue.put is).

When the last subscriber of a signal goes away the previous disposition is
restored right away if that happens on the main thread. Otherwise the
Notifier's handler stays in place and restores the previous disposition the
next time the signal arrives, forwarding that delivery to it, so the process
behaves as if the disposition had been restored eagerly.
"""

import logging
import signal
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any

from .exceptions import SubscriptionError

Deliver = Callable[[int], None]


def _on_main_thread() -> bool:
    return threading.current_thread() is threading.main_thread()


class Notifier:
    """
    Process-wide registry of signal subscriptions.

    Example:
        inbox = queue.SimpleQueue()
        notifier = Notifier()
        notifier.subscribe(signal.SIGHUP, inbox.put)
        ...
        notifier.unsubscribe(signal.SIGHUP, inbox.put)
    """

    def __init__(self, lg: Any | None = None) -> None:
        """
        Initialize the notifier.

        Args:
            lg: Logger instance (optional, defaults to the module logger)
        """
        self._lg = lg if lg is not None else logging.getLogger(__name__)
        self._lock = threading.Lock()
        # Tuples are replaced, never mutated, so the handler can read them
        # without taking the lock.
        self._subscribers: dict[int, tuple[Deliver, ...]] = {}
        self._previous: dict[int, Any] = {}
        self._handler = self._handle

    def subscribe(self, signum: int, deliver: Deliver) -> None:
        """
        Deliver future occurrences of signum to deliver.

        Args:
            signum: Host signal number
            deliver: Reentrant callback taking the signal number

        Raises:
            SubscriptionError: If the handler must be installed and this is
                not the main thread
        """
        with self._lock:
            current = self._subscribers.get(signum, ())
            self._subscribers[signum] = current + (deliver,)
            try:
                self._install(signum)
            except SubscriptionError:
                self._subscribers[signum] = current
                raise

    def unsubscribe(self, signum: int, deliver: Deliver) -> None:
        """
        Stop delivering signum to deliver.

        Unknown callbacks are ignored.
        """
        with self._lock:
            current = self._subscribers.get(signum, ())
            remaining = tuple(d for d in current if d != deliver)
            if remaining:
                self._subscribers[signum] = remaining
                return
            self._subscribers.pop(signum, None)
            if _on_main_thread():
                self._restore(signum)

    def subscribed(self, signum: int) -> bool:
        """Check if any callback is subscribed to signum."""
        return bool(self._subscribers.get(signum))

    def installed(self, signum: int) -> bool:
        """Check if the notifier's handler is the current disposition of signum."""
        return signal.getsignal(signum) == self._handler

    def restore_idle(self) -> None:
        """
        Restore previous dispositions of signals nobody subscribes to.

        Only effective on the main thread; elsewhere this is a no-op and
        restoration stays lazy.
        """
        if not _on_main_thread():
            return
        with self._lock:
            for signum in list(self._previous):
                if not self._subscribers.get(signum):
                    self._restore(signum)

    def _install(self, signum: int) -> None:
        if self.installed(signum):
            return
        try:
            previous = signal.signal(signum, self._handler)
        except ValueError as e:
            raise SubscriptionError(
                "cannot install signal handler", signum=signum, reason=str(e)
            ) from e
        if previous is None:
            # Set from outside Python; nothing better to go back to.
            previous = signal.SIG_DFL
        self._previous[signum] = previous
        self._lg.debug(
            "signal handler installed",
            extra={"signal": signal.Signals(signum).name},
        )

    def _restore(self, signum: int) -> None:
        # The entry stays until the disposition is back: a delivery arriving
        # meanwhile restores and forwards through it.
        previous = self._previous.get(signum)
        if previous is None:
            return
        if self.installed(signum):
            signal.signal(signum, previous)
            self._lg.debug(
                "signal disposition restored",
                extra={"signal": signal.Signals(signum).name},
            )
        self._previous.pop(signum, None)

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        # Runs on the main thread in signal-handler context: no locks.
        subscribers = self._subscribers.get(signum, ())
        if subscribers:
            for deliver in subscribers:
                deliver(signum)
            return

        previous = self._previous.pop(signum, signal.SIG_DFL)
        signal.signal(signum, previous)
        _forward(signum, previous, frame)


def _forward(signum: int, disposition: Any, frame: FrameType | None) -> None:
    """Hand a delivery to a disposition that has just been restored."""
    if disposition == signal.SIG_IGN:
        return
    if disposition == signal.SIG_DFL:
        signal.raise_signal(signum)
        return
    if callable(disposition):
        disposition(signum, frame)


_default: Notifier | None = None
_default_lock = threading.Lock()


def default_notifier() -> Notifier:
    """Return the notifier shared by every Junction in this process."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Notifier()
        return _default
