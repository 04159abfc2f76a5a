"""
Invocation Context

Carries the timeout and cancellation signal for a single invocation. The
invoker only passes it through; transports are responsible for honoring it.
"""

import threading
import time
from typing import Optional


class InvocationContext:
    """
    Timeout and cancellation for one invocation.

    Args:
        timeout_seconds: Time budget for the call, measured from creation
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive if specified")
        self.timeout_seconds = timeout_seconds
        self.deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )
        self._cancelled = threading.Event()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None if there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        """Check whether the deadline has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline

    def cancel(self):
        """Signal cancellation to whoever is honoring this context."""
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        """Check whether the context was cancelled or has expired."""
        return self._cancelled.is_set() or self.expired()


def background() -> InvocationContext:
    """Create a context with no deadline."""
    return InvocationContext()
