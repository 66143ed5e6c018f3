"""Cancellation tokens and clocks for the bounded wait.

A token combines an explicit ``cancel()`` with an optional deadline. Sleeping
goes through the token so that a cancel issued from another thread wakes the
sleeper immediately.
"""
import threading
import time
from typing import Any, Optional

from ec2_manager.errors import OperationCancelledError


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, wake: threading.Event) -> None:
        wake.wait(seconds)


class CancellationToken:
    """Cooperative cancellation signal with an optional deadline.

    Args:
        deadline: Absolute time, on ``clock``, after which the token counts
            as cancelled. ``None`` means no deadline.
        clock: Object exposing ``now()`` and ``sleep(seconds, event)``.
    """

    def __init__(self, deadline: Optional[float] = None, clock: Any = None):
        self.clock = clock or MonotonicClock()
        self.deadline = deadline
        self._event = threading.Event()

    @classmethod
    def with_timeout(cls, seconds: float, clock: Any = None) -> "CancellationToken":
        clock = clock or MonotonicClock()
        return cls(deadline=clock.now() + seconds, clock=clock)

    @classmethod
    def from_lambda_context(cls, context: Any, margin: float = 0.0,
                            clock: Any = None) -> "CancellationToken":
        """Build a token that expires ``margin`` seconds before the Lambda does."""
        get_remaining = getattr(context, 'get_remaining_time_in_millis', None)
        if get_remaining is None:
            return cls(clock=clock)
        remaining = get_remaining() / 1000.0
        return cls.with_timeout(max(remaining - margin, 0.0), clock=clock)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and self.clock.now() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or ``None`` without one."""
        if self.deadline is None:
            return None
        return max(self.deadline - self.clock.now(), 0.0)

    def sleep(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if the token is cancelled."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        if seconds > 0 and not self._event.is_set():
            self.clock.sleep(seconds, self._event)
        return self.cancelled

    def raise_if_cancelled(self, instance_id: str, what: str) -> None:
        if self.cancelled:
            raise OperationCancelledError(instance_id, what)
