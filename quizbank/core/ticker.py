"""Periodic tick scheduling for session countdowns.

A ticker calls a callback once per interval until the returned handle is
cancelled. ``ThreadTicker`` runs on a daemon thread, the same way the API
server is started in the background. ``VirtualTicker`` only fires when a test
advances its clock, so countdowns can be exercised without real waiting.
"""

from __future__ import annotations

import logging
from threading import Event, Lock, Thread
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Ticker(Protocol):
    def schedule(self, interval_seconds: float, callback: TickCallback) -> TickHandle: ...


class _ThreadTickHandle:
    def __init__(self, interval_seconds: float, callback: TickCallback) -> None:
        self._interval = interval_seconds
        self._callback = callback
        self._stopped = Event()
        self._thread = Thread(target=self._run, name="QuizSessionTicker", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _run(self) -> None:
        # Event.wait returns True as soon as cancel() is called.
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Tick callback failed; stopping ticker.")
                self._stopped.set()


class ThreadTicker:
    """Wall-clock ticker backed by one daemon thread per schedule."""

    def schedule(self, interval_seconds: float, callback: TickCallback) -> _ThreadTickHandle:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive.")
        handle = _ThreadTickHandle(interval_seconds, callback)
        handle.start()
        return handle


class _VirtualTickHandle:
    def __init__(self, ticker: VirtualTicker, interval_seconds: float, callback: TickCallback) -> None:
        self._ticker = ticker
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.next_due = ticker.now + interval_seconds
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class VirtualTicker:
    """Deterministic ticker driven by :meth:`advance`."""

    def __init__(self) -> None:
        self.now: float = 0.0
        self._handles: list[_VirtualTickHandle] = []
        self._lock = Lock()

    def schedule(self, interval_seconds: float, callback: TickCallback) -> _VirtualTickHandle:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive.")
        handle = _VirtualTickHandle(self, interval_seconds, callback)
        with self._lock:
            self._handles.append(handle)
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every due tick in order. Returns the tick count."""
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self.now + seconds
        fired = 0
        while True:
            due = self._next_due_handle(target)
            if due is None:
                break
            self.now = due.next_due
            due.next_due += due.interval_seconds
            due.callback()
            fired += 1
        self.now = target
        return fired

    @property
    def active_count(self) -> int:
        with self._lock:
            return sum(1 for handle in self._handles if not handle.cancelled)

    def _next_due_handle(self, target: float) -> _VirtualTickHandle | None:
        with self._lock:
            self._handles = [handle for handle in self._handles if not handle.cancelled]
            pending = [handle for handle in self._handles if handle.next_due <= target]
        if not pending:
            return None
        return min(pending, key=lambda handle: handle.next_due)
