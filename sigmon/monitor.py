"""
Signal monitor.

The Monitor owns one background thread that receives every intercepted
signal and calls the user's handler with it. Handler calls are therefore
strictly serialized, and a handler may freely call set(), stop() or start()
on its own Monitor: those calls only write to a mailbox, a flag or the
shutdown slot, which the loop observes on its next iteration.

Each iteration is a biased scan. Control-plane work (shutdown, handler
replacement) is checked first without blocking; only when there is none
does the loop block, and after waking it again services control-plane work
before taking a signal. A flood of signals can never starve stop() or set().

Example:
    def handle(state: State) -> None:
        if state.signal is Signal.HUP:
            app.reload()
        else:
            app.shutdown()

    monitor = Monitor()
    monitor.start()
    # Only SIGKILL can disturb the process until a handler is set.
    db.migrate()

    monitor.set(handle)
    app.wait()
    monitor.stop()
"""

import logging
import threading
from typing import Any

from .config import MonitorConfig
from .junction import Junction
from .log import TRACE, create_lg
from .notify import Notifier
from .registry import HandlerFunc, HandlerRegistry, is_noop
from .signals import Signal
from .slot import Slot
from .state import BLANK_STATE, State


class Monitor:
    """
    Intercepts HUP, INT, TERM, USR1 and USR2 and dispatches them to a handler.

    start() and stop() are idempotent and safe to call from any thread; set()
    never blocks. The Monitor can be used as a context manager:

        with Monitor(handle) as monitor:
            serve_forever()
    """

    def __init__(
        self,
        handler: HandlerFunc | None = None,
        lg: Any | None = None,
        config: MonitorConfig | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """
        Initialize a stopped monitor.

        Args:
            handler: Initial handler (None means signals are swallowed)
            lg: Logger instance (optional, created from config when None)
            config: Monitor configuration (defaults to MonitorConfig())
            notifier: Signal subscription owner (defaults to the process-wide one)
        """
        self._config = config if config is not None else MonitorConfig()
        self._lg = lg if lg is not None else _default_lg(self._config)

        self._mu = threading.Lock()
        self._on = False
        self._state = BLANK_STATE
        self._thread: threading.Thread | None = None
        # Set once the loop has committed to exiting; it no longer reads stops.
        self._exiting = False

        # One condition for every buffer the loop waits on.
        self._cond = threading.Condition()
        self._done: Slot[bool] = Slot(self._cond)
        self._registry = HandlerRegistry(handler, self._cond)
        self._junction = Junction(
            self._cond,
            lg=self._lg,
            notifier=notifier,
            join_timeout=self._config.join_timeout,
            daemon=self._config.daemon,
            name=self._config.name,
        )

    # Public API

    def start(self) -> None:
        """
        Begin intercepting signals.

        Blocks until the background loop is running. Calling start() while
        already running does nothing. If the loop of an earlier stop() has not
        acted on it yet (for example because the handler is still running),
        the stop is withdrawn and that loop keeps going; a loop that is already
        exiting is waited for. Either way at most one loop thread is alive.

        Raises:
            SubscriptionError: If the OS subscription is refused, e.g. on the
                first start in a process made off the main thread
        """
        while True:
            with self._mu:
                if self._on:
                    return
                previous = self._thread
                if previous is None or not previous.is_alive():
                    ready = self._launch()
                    break
                if not self._exiting:
                    self._done.clear()
                    self._on = True
                    self._lg.debug("monitor stop withdrawn")
                    return
            # Outside the mutex: the exiting loop may need it to finish.
            self._join_previous(previous)

        if not ready.wait(self._config.ready_timeout):
            self._lg.warning(
                "monitor not ready", extra={"timeout": self._config.ready_timeout}
            )
            return
        self._lg.debug("monitor started")

    def stop(self) -> None:
        """
        Stop intercepting signals.

        Does not wait for the background thread; use join() for that. The
        thread disconnects from the OS signals before it exits. Calling stop()
        while stopped does nothing.
        """
        with self._mu:
            if not self._on:
                return
            self._on = False
            self._done.put(True)
        self._lg.debug("monitor stop requested")

    def set(self, handler: HandlerFunc | None) -> None:
        """
        Replace the handler; None means signals are swallowed.

        Never blocks. If set() is called several times before the loop picks
        the change up, the last call wins.
        """
        self._registry.load(handler)

    def state(self) -> State:
        """Return the most recently dispatched State (blank before any)."""
        with self._mu:
            return self._state

    def sig(self) -> Signal | None:
        """Return the most recently dispatched Signal, or None."""
        return self.state().signal

    def is_running(self) -> bool:
        """Check if the monitor is intercepting signals."""
        with self._mu:
            return self._on

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the background thread to exit.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            bool: True if no background thread is alive afterwards. Always
            False when called from the handler, which runs on that thread.
        """
        thread = self._thread
        if thread is None:
            return True
        if thread is threading.current_thread():
            return False
        thread.join(timeout)
        if thread.is_alive():
            return False
        self._junction.notifier.restore_idle()
        return True

    def get_status(self) -> dict[str, Any]:
        """
        Get the current status of the monitor.

        Returns:
            dict: running flag, thread liveness, connection state, last signal
            and whether a handler replacement is pending
        """
        thread = self._thread
        last = self.sig()
        return {
            "running": self.is_running(),
            "thread_alive": thread is not None and thread.is_alive(),
            "connected": self._junction.is_connected(),
            "last_signal": str(last) if last is not None else None,
            "handler_pending": self._registry.pending().ready(),
            "handler_set": not is_noop(self._registry.get()),
        }

    def __enter__(self) -> "Monitor":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()
        self.join(self._config.join_timeout)

    # Background loop

    def _monitor(self, ready: threading.Event) -> None:
        ready.set()
        try:
            while self._biased_scan():
                pass
        finally:
            with self._mu:
                self._exiting = True
                self._on = False
            self._junction.disconnect()
            self._lg.debug("monitor stopped")

    def _biased_scan(self) -> bool:
        """Run one loop iteration; False means the loop must exit."""
        alive = self._pre_scan()
        if alive is not None:
            return alive
        return self._scan()

    def _pre_scan(self) -> bool | None:
        """
        Service control-plane work without blocking.

        Returns:
            False if shutdown was requested, True if a pending handler was
            promoted, None if there was nothing to do
        """
        if self._done.take() is not None:
            with self._mu:
                if self._on:
                    # start() withdrew the stop after it was posted.
                    return True
                self._exiting = True
            return False
        if self._registry.promote():
            self._lg.debug("handler replaced")
            return True
        return None

    def _scan(self) -> bool:
        """Block until any work is ready, then service it by priority."""
        stream = self._junction.signals()
        with self._cond:
            self._cond.wait_for(
                lambda: self._done.ready()
                or self._registry.pending().ready()
                or stream.ready()
            )

        alive = self._pre_scan()
        if alive is not None:
            return alive

        sig = stream.take()
        if sig is not None:
            self._dispatch(sig)
        return True

    def _dispatch(self, sig: Signal) -> None:
        state = State(sig)
        with self._mu:
            self._state = state

        handler = self._registry.get()
        self._lg.log(TRACE, "dispatching signal", extra={"signal": str(sig)})
        try:
            handler(state)
        except Exception:
            self._lg.exception("error in signal handler", extra={"signal": str(sig)})

    def _launch(self) -> threading.Event:
        """Connect and start the loop thread; caller holds the mutex."""
        self._done.clear()
        self._junction.connect()
        self._exiting = False

        ready = threading.Event()
        self._thread = threading.Thread(
            target=self._monitor,
            args=(ready,),
            name=f"{self._config.name}-monitor",
            daemon=self._config.daemon,
        )
        self._on = True
        self._thread.start()
        return ready

    def _join_previous(self, previous: threading.Thread) -> None:
        """Wait for a loop that is exiting after an earlier stop()."""
        while True:
            previous.join(self._config.join_timeout)
            if not previous.is_alive():
                return
            self._lg.warning(
                "previous monitor thread still alive",
                extra={"timeout": self._config.join_timeout},
            )


def _default_lg(config: MonitorConfig) -> logging.Logger:
    """Reuse the configured logger if the application set it up, else create it."""
    lg = logging.getLogger(config.name)
    if lg.handlers:
        return lg
    return create_lg(config.name, config.log_level)


def New(handler: HandlerFunc | None = None, **kwargs: Any) -> Monitor:
    """
    Construct a stopped Monitor.

    Args:
        handler: Initial handler (None means signals are swallowed)
        **kwargs: Passed through to Monitor (lg, config, notifier)
    """
    return Monitor(handler, **kwargs)
