"""Tests for Slot and SignalStream."""

import threading

import pytest

from sigmon.signals import Signal
from sigmon.slot import Slot
from sigmon.stream import SignalStream


@pytest.mark.unit
class TestSlot:
    """Test the single-slot overwrite buffer."""

    def test_empty_take_returns_none(self):
        slot: Slot[int] = Slot()
        assert slot.take() is None
        assert not slot.ready()

    def test_put_then_take(self):
        slot: Slot[str] = Slot()
        slot.put("a")
        assert slot.ready()
        assert slot.take() == "a"
        assert slot.take() is None

    def test_last_write_wins(self):
        slot: Slot[str] = Slot()
        for value in ("a", "b", "c"):
            slot.put(value)
        assert slot.take() == "c"
        assert not slot.ready()

    def test_falsy_values_are_stored(self):
        slot: Slot[bool] = Slot()
        slot.put(False)
        assert slot.ready()
        assert slot.take() is False

    def test_clear_discards_value(self):
        slot: Slot[int] = Slot()
        slot.put(1)
        slot.clear()
        assert not slot.ready()
        assert slot.take() is None

    def test_wait_times_out_when_empty(self):
        slot: Slot[int] = Slot()
        assert slot.wait(timeout=0.01) is False

    def test_wait_wakes_on_put_from_other_thread(self):
        slot: Slot[int] = Slot()
        writer = threading.Timer(0.05, slot.put, args=(7,))
        writer.start()
        try:
            assert slot.wait(timeout=5.0) is True
            assert slot.take() == 7
        finally:
            writer.cancel()

    def test_shared_condition(self):
        cond = threading.Condition()
        first: Slot[int] = Slot(cond)
        second: Slot[int] = Slot(cond)
        assert first.cond is cond
        assert second.cond is cond

        second.put(2)
        with cond:
            assert cond.wait_for(lambda: first.ready() or second.ready(), 1.0)
        assert second.take() == 2

    def test_put_never_blocks(self):
        slot: Slot[int] = Slot()
        done = threading.Event()

        def write_many():
            for i in range(1000):
                slot.put(i)
            done.set()

        threading.Thread(target=write_many).start()
        assert done.wait(5.0)
        assert slot.take() == 999


@pytest.mark.unit
class TestSignalStream:
    """Test the merged signal stream."""

    def test_fifo_across_kinds(self):
        stream = SignalStream()
        for sig in (Signal.TERM, Signal.HUP, Signal.INT):
            assert stream.put(sig) is True
        assert len(stream) == 3
        assert [stream.take(), stream.take(), stream.take()] == [
            Signal.TERM,
            Signal.HUP,
            Signal.INT,
        ]
        assert stream.take() is None

    def test_coalesces_same_kind(self):
        stream = SignalStream()
        assert stream.put(Signal.HUP) is True
        assert stream.put(Signal.HUP) is False
        assert stream.put(Signal.HUP) is False
        assert len(stream) == 1
        assert stream.dropped == 2

    def test_kind_accepted_again_after_take(self):
        stream = SignalStream()
        stream.put(Signal.HUP)
        assert stream.take() is Signal.HUP
        assert stream.put(Signal.HUP) is True

    def test_coalescing_keeps_first_position(self):
        stream = SignalStream()
        stream.put(Signal.HUP)
        stream.put(Signal.INT)
        stream.put(Signal.HUP)
        assert stream.take() is Signal.HUP
        assert stream.take() is Signal.INT

    def test_clear(self):
        stream = SignalStream()
        stream.put(Signal.HUP)
        stream.put(Signal.INT)
        stream.clear()
        assert not stream.ready()
        assert len(stream) == 0
        assert stream.put(Signal.HUP) is True

    def test_get_times_out(self):
        stream = SignalStream()
        assert stream.get(timeout=0.01) is None

    def test_get_wakes_on_put(self):
        stream = SignalStream()
        writer = threading.Timer(0.05, stream.put, args=(Signal.USR1,))
        writer.start()
        try:
            assert stream.get(timeout=5.0) is Signal.USR1
        finally:
            writer.cancel()

    def test_put_notifies_shared_condition(self):
        cond = threading.Condition()
        stream = SignalStream(cond)
        assert stream.cond is cond
        writer = threading.Timer(0.05, stream.put, args=(Signal.TERM,))
        writer.start()
        try:
            with cond:
                assert cond.wait_for(stream.ready, 5.0)
        finally:
            writer.cancel()
