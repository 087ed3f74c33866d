"""Threaded clock that periodically publishes the current time."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_SECONDS = 60

TickObserver = Callable[[datetime], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Clock:
    """Background clock that notifies observers once per interval.

    Missed ticks (for example while the process is suspended) are not
    replayed; observers simply see the next reading.
    """

    def __init__(
        self,
        interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        time_source: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._interval_seconds = interval_seconds
        self._time_source = time_source
        self._observers: list[TickObserver] = []
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    def now(self) -> datetime:
        """Return the current time from the configured time source."""
        return self._time_source()

    def subscribe(self, observer: TickObserver) -> None:
        """Register an observer called with each new timestamp."""
        with self._lock:
            self._observers.append(observer)

    def tick_once(self) -> datetime:
        """Read the time once and notify every observer."""
        timestamp = self.now()
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(timestamp)
            except Exception:
                logger.exception("Clock observer %r failed", observer)
        return timestamp

    def start(self) -> None:
        """Start the background ticking thread."""
        if self._thread and self._thread.is_alive() and not self._stop_event.is_set():
            return
        # Each run gets its own event so a stopping thread never sees the new run's state.
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(self._stop_event,),
            name="incidentsolver-clock",
            daemon=True,
        )
        self._thread.start()
        logger.info("Clock started (interval=%ss)", self._interval_seconds)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the ticking thread to stop and wait for it to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        logger.info("Clock stopped")

    def _run_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(timeout=self._interval_seconds):
            self.tick_once()


__all__ = ["DEFAULT_TICK_INTERVAL_SECONDS", "Clock", "TickObserver"]
