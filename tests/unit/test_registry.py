"""Tests for HandlerRegistry."""

import threading

import pytest

from sigmon.registry import HandlerRegistry, filter_handler, is_noop
from sigmon.signals import Signal
from sigmon.state import State


def handler_a(state):
    pass


def handler_b(state):
    pass


@pytest.mark.unit
class TestFilterHandler:
    """Test None-to-noop substitution."""

    def test_none_becomes_noop(self):
        fn = filter_handler(None)
        assert callable(fn)
        assert is_noop(fn)
        assert fn(State(Signal.HUP)) is None

    def test_handler_passes_through(self):
        assert filter_handler(handler_a) is handler_a
        assert not is_noop(handler_a)


@pytest.mark.unit
class TestHandlerRegistry:
    """Test the current handler plus pending mailbox."""

    def test_initial_handler(self):
        assert HandlerRegistry(handler_a).get() is handler_a

    def test_initial_none_is_noop(self):
        assert is_noop(HandlerRegistry().get())

    def test_load_does_not_change_current(self):
        registry = HandlerRegistry(handler_a)
        registry.load(handler_b)
        assert registry.get() is handler_a
        assert registry.pending().ready()

    def test_promote_makes_pending_current(self):
        registry = HandlerRegistry(handler_a)
        registry.load(handler_b)
        assert registry.promote() is True
        assert registry.get() is handler_b
        assert not registry.pending().ready()

    def test_promote_without_pending(self):
        registry = HandlerRegistry(handler_a)
        assert registry.promote() is False
        assert registry.get() is handler_a

    def test_last_load_wins(self):
        registry = HandlerRegistry()
        registry.load(handler_a)
        registry.load(None)
        registry.load(handler_b)
        assert registry.promote() is True
        assert registry.get() is handler_b
        assert registry.promote() is False

    def test_load_none_promotes_noop(self):
        registry = HandlerRegistry(handler_a)
        registry.load(None)
        registry.promote()
        assert is_noop(registry.get())

    def test_set_bypasses_mailbox(self):
        registry = HandlerRegistry(handler_a)
        registry.set(handler_b)
        assert registry.get() is handler_b
        assert not registry.pending().ready()

    def test_pending_shares_condition(self):
        cond = threading.Condition()
        registry = HandlerRegistry(cond=cond)
        assert registry.pending().cond is cond
