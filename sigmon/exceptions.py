"""
Exception hierarchy for sigmon.

None of the monitor's public operations fail under documented use, so this
hierarchy is small: it covers the OS subscription boundary and configuration.
"""

from typing import Any


class SigmonError(Exception):
    """
    Base exception for all sigmon errors.

    Carries a human-readable message plus optional keyword context, which is
    rendered after the message.

    Example:
        try:
            monitor.start()
        except SigmonError as e:
            lg.error(f"signal monitor unavailable: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class SubscriptionError(SigmonError):
    """
    Raised when the process cannot be subscribed to an OS signal.

    Python only allows signal dispositions to be changed from the main thread
    of the main interpreter, so the first subscription for a signal must
    happen there.
    """

    pass


class ConfigError(SigmonError):
    """
    Configuration-related errors.

    Examples:
        - Unknown configuration key
        - Invalid value type or range
        - Config file not found or malformed
    """

    pass


class InvalidLogLevelError(ConfigError):
    """Raised when an invalid log level is specified."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")
