"""Pytest configuration and fixtures for tests.

Provides a controllable clock and sleep so throttling can be tested without
waiting, and providers wired to an ``httpx.MockTransport``.
"""

import os
from typing import Callable, List

# Keep local .env / environment from leaking into tests
os.environ.setdefault("XERO_DEBUG", "false")

import httpx
import pytest

from xeroclient.services.backoff import BackoffHandler
from xeroclient.services.provider import XeroProvider
from xeroclient.services.rate_window import RateWindowRegistry

BASE_URL = "https://api.xero.com/api.xro/2.0"
TENANT_ID = "tenant-123"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> RateWindowRegistry:
    return RateWindowRegistry(limit=60, window=60.0, clock=clock)


@pytest.fixture
def make_provider(clock: FakeClock, registry: RateWindowRegistry):
    """Factory building a provider whose transport is the given handler."""
    created: List[httpx.AsyncClient] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        max_retries=5,
        **kwargs,
    ) -> XeroProvider:
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            headers={"Authorization": "Bearer test-token"},
        )
        created.append(http_client)
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("base_url", BASE_URL)
        kwargs.setdefault("user_agent", "xeroclient-tests")
        kwargs.setdefault("rate_windows", registry)
        kwargs.setdefault("sleep", clock.sleep)
        kwargs.setdefault(
            "backoff", BackoffHandler(max_retries=max_retries, sleep=clock.sleep)
        )
        return XeroProvider(http_client=http_client, **kwargs)

    return factory


def json_response(payload, status_code: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, json=payload, **kwargs)
