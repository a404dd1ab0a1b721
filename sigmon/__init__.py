"""
OS signal monitoring with a single, replaceable handler.

sigmon intercepts HUP, INT, TERM, USR1 and USR2 (USR1/USR2 where the platform
has them) and calls one user-supplied handler for each, serialized on a
background thread. The handler can be swapped at any time without blocking,
and interception can be started and stopped repeatedly from any thread.

    import sigmon

    monitor = sigmon.New()
    monitor.start()
    # Do things which cannot be affected by OS signals...

    monitor.set(handle)
    # Do things which can be affected by OS signals...

    monitor.set(None)
    # Do more things which cannot be affected by OS signals...

    monitor.stop()
    # OS signals are handled normally again.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import MonitorConfig
from .exceptions import (
    ConfigError,
    InvalidLogLevelError,
    SigmonError,
    SubscriptionError,
)
from .junction import Junction
from .log import TRACE, create_lg, resolve_level
from .monitor import Monitor, New
from .notify import Notifier, default_notifier
from .registry import HandlerFunc, HandlerRegistry
from .route import route
from .signals import Signal
from .state import BLANK_STATE, State

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("sigmon")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Monitor
    "New",
    "Monitor",
    "MonitorConfig",
    # Values
    "Signal",
    "State",
    "BLANK_STATE",
    "HandlerFunc",
    "route",
    # Building blocks
    "Junction",
    "HandlerRegistry",
    "Notifier",
    "default_notifier",
    # Logging
    "TRACE",
    "create_lg",
    "resolve_level",
    # Exceptions
    "SigmonError",
    "SubscriptionError",
    "ConfigError",
    "InvalidLogLevelError",
]
