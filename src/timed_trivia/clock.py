"""Session Clock: host-side scheduler that ticks a session at a fixed cadence."""

import logging
import threading
import time
from typing import Callable, Optional

from timed_trivia.quiz_session import Phase, QuizSession

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1  # seconds


class SessionClock:
    """
    Background thread calling ``callback(elapsed_seconds)`` every ``interval``.

    Elapsed time is measured on the monotonic clock, so a late wakeup still
    decrements the full time that passed. The loop ends when ``stop()`` is
    called or the callback returns False. If ``lock`` is given, each callback
    runs while holding it, which is how the host serializes ticks with answer
    submissions.
    """

    def __init__(self, callback: Callable[[float], Optional[bool]], interval: float = TICK_INTERVAL,
                 lock: Optional[threading.Lock] = None):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.callback = callback
        self.interval = interval
        self._lock = lock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self):
        if self._thread is not None:
            raise RuntimeError("SessionClock can only be started once")
        self._thread = threading.Thread(target=self._run, name="session-clock", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = 1.0):
        """Stop ticking and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        last = time.monotonic()
        while not self._stop_event.wait(self.interval):
            now = time.monotonic()
            elapsed, last = now - last, now
            if self._lock is not None:
                with self._lock:
                    keep_going = self.callback(elapsed)
            else:
                keep_going = self.callback(elapsed)
            if keep_going is False:
                logger.debug("Clock callback finished; stopping")
                break


def session_ticker(session: QuizSession) -> Callable[[float], bool]:
    """Tick callback for ``session`` that stops once the question is no longer running."""

    def _tick(elapsed: float) -> bool:
        if session.phase is not Phase.IN_PROGRESS:
            return False
        session.tick(elapsed)
        return session.phase is Phase.IN_PROGRESS

    return _tick
