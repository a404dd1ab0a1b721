#!/usr/bin/env python3
"""
Reload on HUP, shut down on everything else.

This example demonstrates:
- Starting a monitor before the handler is known, so startup work cannot be
  interrupted by HUP, INT, TERM, USR1 or USR2
- Installing a per-signal handler with route()
- Blocking the main thread until a shutdown signal arrives

Usage:
    python reload_on_hup.py
    kill -HUP <pid>     # logs "reloading"
    kill -TERM <pid>    # logs "shutting down" and exits

Expected output:
- Lifecycle messages from the monitor at debug level
- One "reloading" line per HUP
"""

import os
import pathlib
import sys
import threading
import time

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
sys.path.append(project_root) if project_root not in sys.path else None

import sigmon


class App:
    """Toy application with reload and shutdown hooks."""

    def __init__(self, lg) -> None:
        self._lg = lg
        self._stopped = threading.Event()

    def migrate(self) -> None:
        self._lg.info("migrating", extra={"pid": os.getpid()})
        time.sleep(1.0)

    def reload(self) -> None:
        self._lg.info("reloading")

    def shutdown(self, state: sigmon.State) -> None:
        self._lg.info("shutting down", extra={"signal": str(state.signal)})
        self._stopped.set()

    def wait(self) -> None:
        # Short waits keep the main thread free to run signal handlers.
        while not self._stopped.wait(0.5):
            pass


def main() -> int:
    lg = sigmon.create_lg("example", "debug")
    monitor = sigmon.New(lg=lg)
    monitor.start()

    # Only SIGKILL can disturb the following until a handler is set.
    app = App(lg)
    app.migrate()

    monitor.set(sigmon.route({sigmon.Signal.HUP: app.reload}, default=app.shutdown))
    app.wait()

    monitor.stop()
    monitor.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())
