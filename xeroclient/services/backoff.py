"""Handling of '429 Too Many Requests' responses."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5


class BackoffHandler:
    """Sleeps for the server-supplied ``Retry-After`` and signals a retry.

    Retries are bounded by ``max_retries``. Passing ``None`` retries for as
    long as the server keeps throttling, which can wait forever against a
    server that never lets up.
    """

    def __init__(
        self,
        max_retries: Optional[int] = DEFAULT_MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_retries = max_retries
        self._sleep = sleep

    @staticmethod
    def retry_after(response: httpx.Response) -> Optional[float]:
        """Read ``Retry-After`` as whole seconds; None when absent or unparseable."""
        value = response.headers.get("Retry-After")
        if value is None or value.strip() == "":
            return None
        try:
            seconds = int(value.strip())
        except ValueError:
            logger.warning(f"Ignoring unparseable Retry-After header: {value!r}")
            return None
        if seconds < 0:
            return None
        return float(seconds)

    def exhausted(self, attempt: int) -> bool:
        return self.max_retries is not None and attempt >= self.max_retries

    async def handle_throttled(self, response: httpx.Response, attempt: int = 0) -> bool:
        """React to a throttled response.

        Args:
            response: The 429 response
            attempt: How many throttle retries this request already used

        Returns:
            True if the caller should send the same request again
        """
        delay = self.retry_after(response)
        if delay is None:
            return False
        if self.exhausted(attempt):
            logger.warning(
                f"Rate limited, giving up after {attempt} retries "
                f"(Retry-After: {delay:.0f}s)"
            )
            return False

        logger.warning(
            f"Rate limited, waiting {delay:.0f}s before retry "
            f"(attempt {attempt + 1}"
            + (f"/{self.max_retries})" if self.max_retries is not None else ")")
        )
        await self._sleep(delay)
        return True
