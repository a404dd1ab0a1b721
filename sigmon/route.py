"""
Per-signal handler routing.

Most applications want different behavior per signal (reload on HUP, shut
down on everything else). route() builds a single handler from a table so
that pattern does not need a hand-written if/elif chain:

    monitor.set(route({Signal.HUP: app.restart}, default=app.shutdown))
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from .registry import HandlerFunc
from .signals import Signal
from .state import State

Action = Callable[[], Any] | Callable[[State], Any]


def _takes_state(action: Action) -> bool:
    """Check if action accepts the State argument."""
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        return True
    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    )
    return any(param.kind in positional for param in params)


def _adapt(action: Action | None) -> HandlerFunc | None:
    if action is None:
        return None
    if _takes_state(action):
        return action  # type: ignore[return-value]
    return lambda state: action()  # type: ignore[call-arg]


def route(
    table: Mapping[Signal | str, Action | None], default: Action | None = None
) -> HandlerFunc:
    """
    Build a handler that dispatches on state.signal.

    Args:
        table: Signal (or its name, e.g. "HUP") to action. Actions take
               either no arguments or the State.
        default: Action for signals missing from table (None ignores them)

    Returns:
        HandlerFunc suitable for Monitor.set()

    Raises:
        ValueError: If a table key is not a recognized signal name
    """
    actions: dict[Signal, HandlerFunc | None] = {
        Signal(key): _adapt(action) for key, action in table.items()
    }
    fallback = _adapt(default)

    def handle(state: State) -> None:
        if state.signal is None:
            return
        action = actions.get(state.signal, fallback)
        if action is not None:
            action(state)

    return handle
