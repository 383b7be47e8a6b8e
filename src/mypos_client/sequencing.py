"""Ordering helpers for background requests.

Searches and focus refreshes can resolve out of order. Each request takes a
ticket from a :class:`LatestRequestGuard`; a result is applied only when its
ticket is still the newest one issued.
"""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def thread_timer_scheduler(delay_seconds: float, callback: Callable[[], None]) -> Cancellable:
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class LatestRequestGuard:
    _counter: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)
    _latest: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def invalidate(self) -> None:
        """Make every outstanding ticket stale."""
        self.issue()

    def is_latest(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._latest

    def apply_if_latest(self, ticket: int, apply: Callable[[], None]) -> bool:
        if not self.is_latest(ticket):
            logger.debug("stale_result_dropped", extra={"ticket": ticket})
            return False
        apply()
        return True


@dataclass
class DebouncedProductSearch(Generic[T]):
    """Runs ``search`` once typing pauses for ``wait_ms``.

    Every call to :meth:`submit` restarts the wait. A blank query cancels the
    pending search and invalidates any in-flight one. Failures are logged and
    never reach the caller.
    """

    search: Callable[[str], T]
    on_results: Callable[[str, T], None]
    wait_ms: int = 500
    scheduler: Scheduler = thread_timer_scheduler
    guard: LatestRequestGuard = field(default_factory=LatestRequestGuard)
    _pending: Cancellable | None = field(default=None, repr=False)

    def submit(self, query: str) -> None:
        self.cancel()
        term = query.strip()
        if not term:
            return
        ticket = self.guard.issue()
        self._pending = self.scheduler(self.wait_ms / 1000, lambda: self._run(term, ticket))

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.guard.invalidate()

    def run_now(self, query: str) -> None:
        self.cancel()
        term = query.strip()
        if term:
            self._run(term, self.guard.issue())

    def _run(self, term: str, ticket: int) -> None:
        if not self.guard.is_latest(ticket):
            return
        try:
            results = self.search(term)
        except Exception as exc:
            logger.warning("product_search_failed", extra={"query_length": len(term), "error": str(exc)})
            return
        self.guard.apply_if_latest(ticket, lambda: self.on_results(term, results))
