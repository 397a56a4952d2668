import asyncio
import threading
import time
from typing import Callable, Optional

DEFAULT_RATE = 100.0
DEFAULT_BURST = 1


class RateLimiter:
    """Token bucket shared by every call a client makes to the quoting service.

    Callers reserve a token up front and then wait out the returned delay, so
    concurrent callers are served in reservation order. The bucket may go
    negative while reservations are outstanding.

    Args:
        rate: Tokens added per second.
        burst: Bucket capacity.
        clock: Monotonic time source, in seconds.
    """

    def __init__(
        self,
        rate: float = DEFAULT_RATE,
        burst: int = DEFAULT_BURST,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = rate
        self.burst = burst
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens = float(burst)
        self._last = clock()

    def _advance(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last = now

    def reserve(self) -> float:
        """Take one token and return how many seconds to wait before using it."""
        with self._lock:
            self._advance(self._clock())
            self._tokens -= 1
            if self._tokens >= 0:
                return 0.0
            return -self._tokens / self.rate

    def cancel(self) -> None:
        """Give back a token reserved with :meth:`reserve` but never used."""
        with self._lock:
            self._advance(self._clock())
            self._tokens = min(float(self.burst), self._tokens + 1)

    def allow(self) -> bool:
        """Take a token only if one is available right now."""
        with self._lock:
            self._advance(self._clock())
            if self._tokens >= 1:
                self._tokens -= 1
                return True
            return False

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a token is available.

        Raises:
            TimeoutError: If the wait would exceed ``timeout`` seconds. The
                reservation is returned and no time is spent waiting.
        """
        delay = self.reserve()
        if delay <= 0:
            return
        if timeout is not None and delay > timeout:
            self.cancel()
            raise TimeoutError(
                f"rate limiter wait of {delay:.3f}s exceeds timeout of {timeout:.3f}s"
            )
        time.sleep(delay)

    async def wait_async(self) -> None:
        """Suspend until a token is available.

        Cancelling the awaiting task returns the reservation.
        """
        delay = self.reserve()
        if delay <= 0:
            return
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancel()
            raise
