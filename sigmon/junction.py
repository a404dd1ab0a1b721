"""
Signal junction.

The Junction subscribes to the five recognized signals and merges their
notifications into one SignalStream. Deliveries arrive in signal-handler
context on the main thread, so they are first dropped into a lock-free
SimpleQueue; a fan-in thread moves them onto the stream, where locking is
safe.
"""

import logging
import queue
import threading
from typing import Any

from .log import TRACE
from .notify import Notifier, default_notifier
from .signals import Signal
from .stream import SignalStream

_CLOSE = -1


class Junction:
    """
    Multiplexes the recognized OS signals into one stream.

    connect() and disconnect() are idempotent: calling either while already
    in that state does nothing.

    Example:
        junction = Junction()
        junction.connect()
        sig = junction.signals().get(timeout=1.0)
        junction.disconnect()
    """

    def __init__(
        self,
        cond: threading.Condition | None = None,
        lg: Any | None = None,
        notifier: Notifier | None = None,
        join_timeout: float | None = 5.0,
        daemon: bool = True,
        name: str = "sigmon",
    ) -> None:
        """
        Initialize a disconnected junction.

        Args:
            cond: Condition the merged stream notifies (shared with the Monitor)
            lg: Logger instance (optional, defaults to the module logger)
            notifier: Signal subscription owner (defaults to the process-wide one)
            join_timeout: Seconds to wait for the fan-in thread on disconnect
            daemon: Whether the fan-in thread is a daemon thread
            name: Prefix for the fan-in thread name
        """
        self._lg = lg if lg is not None else logging.getLogger(__name__)
        self._notifier = notifier if notifier is not None else default_notifier()
        self._join_timeout = join_timeout
        self._daemon = daemon
        self._name = name
        self._lock = threading.Lock()
        self._connected = False
        self._stream = SignalStream(cond)
        self._inbox: queue.SimpleQueue[int] | None = None
        self._deliver: Any = None
        self._subscribed: list[int] = []
        self._fan_in: threading.Thread | None = None

    def connect(self) -> None:
        """
        Subscribe to every available recognized signal and start fanning in.

        Raises:
            SubscriptionError: If the OS subscription is refused (for example
                the first connect in a process done off the main thread)
        """
        with self._lock:
            if self._connected:
                return

            inbox: queue.SimpleQueue[int] = queue.SimpleQueue()
            # One bound method per connection, so late deliveries from a
            # previous connection land in that connection's inbox.
            deliver = inbox.put
            try:
                for sig in Signal.available():
                    assert sig.signum is not None
                    self._notifier.subscribe(sig.signum, deliver)
                    self._subscribed.append(sig.signum)
            except Exception:
                self._unsubscribe_all(deliver)
                raise

            self._inbox = inbox
            self._deliver = deliver
            self._fan_in = threading.Thread(
                target=self._run_fan_in,
                args=(inbox,),
                name=f"{self._name}-fan-in",
                daemon=self._daemon,
            )
            self._fan_in.start()
            self._connected = True
            self._lg.debug(
                "junction connected",
                extra={"signals": [str(s) for s in Signal.available()]},
            )

    def disconnect(self) -> None:
        """Unsubscribe from all signals, stop fanning in, drop buffered signals."""
        with self._lock:
            if not self._connected:
                return
            self._connected = False

            self._unsubscribe_all(self._deliver)

            assert self._inbox is not None
            self._inbox.put(_CLOSE)
            fan_in = self._fan_in
            if fan_in is not None and fan_in is not threading.current_thread():
                fan_in.join(self._join_timeout)
                if fan_in.is_alive():
                    self._lg.warning(
                        "fan-in thread did not stop",
                        extra={"timeout": self._join_timeout},
                    )

            self._fan_in = None
            self._inbox = None
            self._deliver = None
            self._stream.clear()
            self._lg.debug("junction disconnected")

    @property
    def notifier(self) -> Notifier:
        """Signal subscription owner this junction subscribes through."""
        return self._notifier

    def signals(self) -> SignalStream:
        """Merged stream of received signals (single reader)."""
        return self._stream

    def is_connected(self) -> bool:
        """Check if the junction is subscribed to the OS signals."""
        with self._lock:
            return self._connected

    def _unsubscribe_all(self, deliver: Any) -> None:
        for signum in self._subscribed:
            self._notifier.unsubscribe(signum, deliver)
        self._subscribed = []

    def _run_fan_in(self, inbox: "queue.SimpleQueue[int]") -> None:
        while True:
            signum = inbox.get()
            if signum == _CLOSE:
                return
            try:
                sig = Signal.from_signum(signum)
            except ValueError:
                self._lg.warning("ignoring unexpected signal", extra={"signum": signum})
                continue
            if self._stream.put(sig):
                self._lg.log(TRACE, "signal received", extra={"signal": str(sig)})
            else:
                self._lg.log(TRACE, "signal coalesced", extra={"signal": str(sig)})
