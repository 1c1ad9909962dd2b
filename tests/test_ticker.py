from __future__ import annotations

from threading import Event

import pytest

from quizbank.core.ticker import ThreadTicker, VirtualTicker


def test_virtual_ticker_fires_once_per_interval():
    ticker = VirtualTicker()
    calls = []
    ticker.schedule(1.0, lambda: calls.append(ticker.now))

    assert ticker.advance(3) == 3
    assert calls == [1.0, 2.0, 3.0]


def test_virtual_ticker_does_not_fire_partial_intervals():
    ticker = VirtualTicker()
    calls = []
    ticker.schedule(1.0, lambda: calls.append(1))

    ticker.advance(0.5)
    assert calls == []
    ticker.advance(0.5)
    assert calls == [1]


def test_cancelled_handle_stops_firing():
    ticker = VirtualTicker()
    calls = []
    handle = ticker.schedule(1.0, lambda: calls.append(1))

    ticker.advance(2)
    handle.cancel()
    ticker.advance(5)

    assert handle.cancelled
    assert len(calls) == 2
    assert ticker.active_count == 0


def test_callback_may_cancel_its_own_handle():
    ticker = VirtualTicker()
    calls = []
    handle = None

    def callback():
        calls.append(1)
        handle.cancel()

    handle = ticker.schedule(1.0, callback)
    ticker.advance(10)
    assert calls == [1]


def test_invalid_intervals_are_rejected():
    with pytest.raises(ValueError):
        VirtualTicker().schedule(0, lambda: None)
    with pytest.raises(ValueError):
        ThreadTicker().schedule(-1, lambda: None)
    with pytest.raises(ValueError):
        VirtualTicker().advance(-1)


def test_thread_ticker_fires_until_cancelled():
    fired = Event()
    handle = ThreadTicker().schedule(0.01, fired.set)
    try:
        assert fired.wait(timeout=2.0)
    finally:
        handle.cancel()
    assert handle.cancelled
