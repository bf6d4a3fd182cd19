"""
Clock and Cancellation
======================

Time source and stop signal for animated playback.

The player never calls time.sleep directly; it goes through a Clock so
tests can substitute a recording clock and run without wall-clock waits.
Playback stops cooperatively: the StopToken is polled between frames and
before each sleep, and SystemClock cuts a sleep short once it is set.
"""

import threading
import time
from typing import Optional, Protocol


# Longest stretch SystemClock sleeps before re-checking its stop token.
STOP_POLL_INTERVAL_S = 0.05


class StopToken:
    """
    Cooperative stop signal for playback.

    Safe to set from a signal handler; the player checks it before
    drawing each frame and before each sleep, and returns once it is set.

    Example:
        token = StopToken()
        signal.signal(signal.SIGTERM, lambda *_: token.set())
        player = AnimationPlayer(out=sys.stdout, loop=True, stop_token=token)
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        """Request playback to stop."""
        self._event.set()

    def is_set(self) -> bool:
        """Whether a stop has been requested."""
        return self._event.is_set()

    def clear(self) -> None:
        """Reset the token so it can be reused."""
        self._event.clear()


class Clock(Protocol):
    """
    Protocol for time sources used by the animation player.

    Implementations:
        - SystemClock (real time)
        - test doubles that record requested sleeps
    """

    def monotonic(self) -> float:
        """Current time in seconds from an arbitrary, monotonic origin."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block for `seconds`."""
        ...


class SystemClock:
    """
    Real clock backed by the time module.

    With a stop token the sleep is taken in short slices and returns
    early once the token is set. The token is read with is_set() only;
    Event.wait() is avoided because a signal handler calling set() while
    the main thread holds the event's lock would deadlock.
    """

    def __init__(
        self,
        stop_token: Optional[StopToken] = None,
        poll_interval: float = STOP_POLL_INTERVAL_S,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.stop_token = stop_token
        self.poll_interval = poll_interval

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            return
        if self.stop_token is None:
            time.sleep(seconds)
            return

        deadline = time.monotonic() + seconds
        while not self.stop_token.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            time.sleep(min(remaining, self.poll_interval))
