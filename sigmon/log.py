"""
Logging helpers.

sigmon components log through an injected ``lg`` (any logging.Logger) with
short messages and structured ``extra={...}`` fields. This module adds:

- a TRACE level (5) used for per-signal chatter
- level name resolution, including "false" to disable logging
- FieldFormatter, which renders extra fields as ``[key:value]`` after the
  message
- create_lg(), a one-call logger factory for applications and tests
"""

import logging
import sys
from typing import IO, Any

from .exceptions import InvalidLogLevelError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_FORMAT = "[%(asctime)s] [%(levelname).1s] %(message)s"
DEFAULT_RULE_WIDTH = 70

LEVEL_NAMES: dict[str, int | bool] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "false": False,  # Special value to disable all logging
}

# Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        level: Level name, numeric value, or False to disable logging

    Returns:
        Union[int, bool]: Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if level.isnumeric():
        return int(level)
    if level.lower() in LEVEL_NAMES:
        return LEVEL_NAMES[level.lower()]
    raise InvalidLogLevelError(level)


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extract the fields passed through extra= from a log record."""
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class FieldFormatter(logging.Formatter):
    """
    Formatter that appends extra fields, process id and logger name.

    Output looks like:
        [12:34:56,789] [D] junction connected      [signals:HUP,INT] [1234] [sigmon]
    """

    def __init__(self, rule_width: int = DEFAULT_RULE_WIDTH) -> None:
        super().__init__(DEFAULT_FORMAT, datefmt="%H:%M:%S")
        self._rule_width = rule_width

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        head, sep, tail = line.partition("\n")

        fields = record_fields(record)
        parts = [f"[{k}:{_field_str(fields[k])}]" for k in sorted(fields)]
        parts.append(f"[{record.process}]")
        parts.append(f"[{record.name}]")

        pad = " " * max(1, self._rule_width - len(head))
        return head + pad + " ".join(parts) + sep + tail


def _field_str(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(map(str, value))
    if isinstance(value, BaseException):
        return value.__class__.__name__
    return str(value)


def create_lg(
    name: str = "sigmon",
    level: str | int | bool = "info",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Create a logger writing formatted records to a stream.

    Existing handlers on the named logger are replaced, so calling this
    twice with the same name does not duplicate output.

    Args:
        name: Logger name
        level: Log level (name, number, or False to disable)
        stream: Output stream (defaults to stderr)

    Returns:
        logging.Logger: Configured logger

    Example:
        >>> lg = create_lg("myapp.signals", "debug")
        >>> monitor = Monitor(handler, lg=lg)
    """
    resolved = resolve_level(level)
    lg = logging.getLogger(name)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)

    if resolved is False:
        lg.disabled = True
        lg.addHandler(logging.NullHandler())
        return lg

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(FieldFormatter())
    lg.addHandler(handler)
    lg.setLevel(resolved)
    lg.disabled = False
    lg.propagate = False
    return lg
