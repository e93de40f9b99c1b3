"""Per-tenant sliding window of recent request instants.

Xero allows 60 calls per rolling minute for each organisation. The window
keeps the instants of the last ``limit`` requests and derives the delay the
next request needs from the age of the oldest one. Entries are only dropped
when newer ones push them out, so a burst followed by idle time still fills
the window until ``limit`` more requests have been recorded.

Windows are guarded by a ``threading.Lock``: critical sections never block,
so the registry can be shared by coroutines on one loop as well as by
threads running their own loops.
"""

import time
from collections import deque
from threading import Lock
from typing import Callable, Deque, Dict, List, Optional

DEFAULT_LIMIT = 60
DEFAULT_WINDOW = 60.0  # seconds
EPSILON = 0.001  # seconds, makes sure the window has rolled over


class RateWindow:
    """Sliding window for a single tenant."""

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        window: float = DEFAULT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.window = window
        self._clock = clock
        self._instants: Deque[float] = deque()
        self._lock = Lock()

    def should_delay(self, now: Optional[float] = None) -> float:
        """Return how many seconds to wait before the next request (0 for none)."""
        with self._lock:
            if len(self._instants) < self.limit:
                return 0.0
            oldest = self._instants[0]
        now = self._clock() if now is None else now
        elapsed = now - oldest
        if elapsed >= self.window:
            return 0.0
        return self.window - elapsed + EPSILON

    def record(self, instant: Optional[float] = None) -> None:
        """Append a request instant, evicting the oldest beyond ``limit``."""
        instant = self._clock() if instant is None else instant
        with self._lock:
            self._instants.append(instant)
            while len(self._instants) > self.limit:
                self._instants.popleft()

    def snapshot(self) -> List[float]:
        with self._lock:
            return list(self._instants)

    def __len__(self) -> int:
        with self._lock:
            return len(self._instants)


class RateWindowRegistry:
    """Owns one ``RateWindow`` per tenant, created on first use.

    Example:
        ```python
        registry = RateWindowRegistry()
        delay = registry.should_delay("tenant-id")
        ...
        registry.record_request("tenant-id")
        ```
    """

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        window: float = DEFAULT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window = window
        self.clock = clock
        self._windows: Dict[str, RateWindow] = {}
        self._lock = Lock()

    def window_for(self, tenant: str) -> RateWindow:
        """Get or create the window for a tenant."""
        with self._lock:
            window = self._windows.get(tenant)
            if window is None:
                window = RateWindow(self.limit, self.window, self.clock)
                self._windows[tenant] = window
            return window

    def should_delay(self, tenant: str) -> float:
        return self.window_for(tenant).should_delay()

    def record_request(self, tenant: str, instant: Optional[float] = None) -> None:
        self.window_for(tenant).record(instant)

    def reset(self, tenant: Optional[str] = None) -> None:
        """Forget recorded requests for one tenant, or for all of them."""
        with self._lock:
            if tenant is None:
                self._windows.clear()
            else:
                self._windows.pop(tenant, None)

    def tenants(self) -> List[str]:
        with self._lock:
            return list(self._windows)
