"""Request executor for the Xero accounting API.

This module provides the XeroProvider class every entity endpoint goes
through. It includes:
- Authenticated httpx client (bearer credential supplied by the caller)
- Per-tenant throttle gate (60 requests per rolling minute)
- Bounded retry of '429 Too Many Requests' responses using Retry-After
- Uniform classification of responses into bytes or a typed error
- Cancellation through an asyncio.Event or a deadline
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Mapping, Optional, Union

import httpx

from xeroclient.core.config import settings
from xeroclient.core.errors import (
    XeroAPIError,
    XeroCancelledError,
    XeroEmptyResponseError,
    XeroRateLimitError,
    XeroTransportError,
)
from xeroclient.core.logging import TenantLoggerAdapter
from xeroclient.services.auth import BearerAuth, TokenSource
from xeroclient.services.backoff import BackoffHandler
from xeroclient.services.rate_window import RateWindowRegistry

logger = logging.getLogger(__name__)

Body = Union[bytes, str]


class XeroProvider:
    """Executes authenticated requests against the Xero API.

    Provides four operations used by every entity endpoint:
    - find: GET with an encoded query string
    - create: PUT with a body
    - update: POST with a body
    - remove: DELETE

    Every call waits on the tenant's rate window before sending, records the
    instant once a response (or transport failure) comes back, and retries
    throttled responses as long as the backoff handler allows.

    Example:
        ```python
        async with XeroProvider(tenant_id="...", access_token=token) as provider:
            raw = await provider.find("BankTransactions", {"Accept": "application/json"})
        ```
    """

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    def __init__(
        self,
        tenant_id: Optional[str] = None,
        access_token: Optional[TokenSource] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        rate_windows: Optional[RateWindowRegistry] = None,
        backoff: Optional[BackoffHandler] = None,
        timeout: Optional[float] = None,
        debug: Optional[bool] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize XeroProvider.

        Args:
            tenant_id: Organisation the requests act on (Xero-tenant-id header)
            access_token: Bearer token, or a callable returning a valid one.
                Ignored when http_client is given.
            http_client: Pre-authenticated client. Not closed by this provider.
            base_url: API base URL. Defaults to settings.base_url.
            user_agent: User-Agent header. Defaults to settings.user_agent.
            rate_windows: Registry of per-tenant windows, shareable between providers
            backoff: Handler for 429 responses
            timeout: Transport timeout in seconds
            debug: Log request and response dumps at DEBUG level
            sleep: Awaitable used for throttle-gate delays
        """
        if http_client is None and access_token is None:
            raise ValueError("Either access_token or http_client is required")

        self.tenant_id = tenant_id if tenant_id is not None else settings.tenant_id
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.debug = debug if debug is not None else settings.debug
        self.rate_windows = rate_windows or RateWindowRegistry(
            limit=settings.rate_limit,
            window=settings.rate_window_seconds,
        )
        self._sleep = sleep
        self.backoff = backoff or BackoffHandler(
            max_retries=settings.max_throttle_retries,
            sleep=sleep,
        )

        self._access_token = access_token
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or (self._owns_client and self._client.is_closed):
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                auth=BearerAuth(self._access_token),
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "XeroProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Operations
    # =========================================================================

    async def find(
        self,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Retrieve data from an endpoint."""
        return await self.execute(
            self.GET, path, headers=headers, params=params, cancel=cancel, timeout=timeout
        )

    async def create(
        self,
        path: str,
        body: Body,
        headers: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Send new records to an endpoint. Not idempotent."""
        return await self.execute(
            self.PUT, path, headers=headers, body=body, cancel=cancel, timeout=timeout
        )

    async def update(
        self,
        path: str,
        body: Body,
        headers: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Send changes for an existing record to an endpoint."""
        return await self.execute(
            self.POST, path, headers=headers, body=body, cancel=cancel, timeout=timeout
        )

    async def remove(
        self,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Delete the record at an endpoint."""
        return await self.execute(
            self.DELETE, path, headers=headers, cancel=cancel, timeout=timeout
        )

    async def execute(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Body] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Run a request through the throttle gate, transport and classification.

        Args:
            method: HTTP method
            path: Endpoint path relative to the base URL
            headers: Operation-specific headers (Accept, Content-Type, ...)
            params: Query string parameters
            body: Request body for writes
            cancel: Event that aborts the request when set
            timeout: Deadline in seconds for the whole operation, waits included

        Returns:
            The raw response body

        Raises:
            XeroTransportError: No response was received
            XeroRateLimitError: Throttled and not retried
            XeroAPIError: Any other status than 200
            XeroEmptyResponseError: 200 without a body
            XeroCancelledError: cancel was set or the deadline passed
        """
        if cancel is not None and cancel.is_set():
            raise XeroCancelledError(f"{method} {path} cancelled before sending")

        operation = self._execute(method, path, headers, params, body)
        if cancel is None and timeout is None:
            return await operation
        return await self._run_cancellable(operation, cancel, timeout, f"{method} {path}")

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run_cancellable(
        self,
        operation: Awaitable[bytes],
        cancel: Optional[asyncio.Event],
        timeout: Optional[float],
        description: str,
    ) -> bytes:
        """Race an operation against the cancel event and the deadline."""
        task = asyncio.ensure_future(operation)
        waiters = {task}
        cancel_waiter = None
        if cancel is not None:
            cancel_waiter = asyncio.ensure_future(cancel.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            raise

        if cancel_waiter is not None:
            cancel_waiter.cancel()
        if task in done:
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled():
            # Finished while being cancelled; its outcome is discarded
            task.exception()

        reason = "cancelled" if cancel is not None and cancel.is_set() else "timed out"
        logger.info(f"{description} {reason}")
        raise XeroCancelledError(f"{description} {reason}")

    def _build_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]],
        body: Optional[Body],
    ) -> httpx.Request:
        request_headers: Dict[str, str] = {
            "User-Agent": self.user_agent,
            "Xero-tenant-id": self.tenant_id,
        }
        if headers:
            request_headers.update(headers)

        return client.build_request(
            method=method,
            url=f"{self.base_url}/{path.lstrip('/')}",
            params=dict(params) if params else None,
            content=body,
            headers=request_headers,
        )

    async def _wait_for_rate_window(self, tenant: str, log: logging.LoggerAdapter) -> None:
        delay = self.rate_windows.should_delay(tenant)
        if delay > 0:
            log.debug(f"Request limit reached, waiting {delay:.3f}s")
            await self._sleep(delay)

    async def _execute(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]],
        body: Optional[Body],
    ) -> bytes:
        tenant = self.tenant_id
        log = TenantLoggerAdapter(logger, {"tenant": tenant})
        client = await self._get_client()
        throttled = 0

        while True:
            request = self._build_request(client, method, path, headers, params, body)

            await self._wait_for_rate_window(tenant, log)

            if self.debug:
                self._dump_request(request, log)

            try:
                response = await client.send(request)
            except httpx.HTTPError as e:
                self.rate_windows.record_request(tenant)
                raise XeroTransportError(
                    f"Request to Xero failed ({method} {path}): {e}"
                ) from e

            self.rate_windows.record_request(tenant)

            if self.debug:
                self._dump_response(response, log)

            if response.status_code == 429:
                if await self.backoff.handle_throttled(response, throttled):
                    throttled += 1
                    continue
                raise XeroRateLimitError(
                    f"Rate limited ({method} {path}): {response.text or 'Too Many Requests'}",
                    body=response.text,
                    retry_after=self.backoff.retry_after(response),
                    attempts=throttled + 1,
                )

            return self._classify(response, method, path)

    def _classify(self, response: httpx.Response, method: str, path: str) -> bytes:
        status = response.status_code
        if status != 200:
            text = response.text
            raise XeroAPIError(
                text or f"API error ({status}) for {method} {path}",
                status_code=status,
                body=text,
            )

        content = response.content
        if not content:
            raise XeroEmptyResponseError(f"Received no response for {method} {path}")
        return content

    def _dump_request(self, request: httpx.Request, log: logging.LoggerAdapter) -> None:
        headers = "\n".join(f"{k}: {v}" for k, v in request.headers.items())
        content = request.content.decode("utf-8", errors="replace")
        log.debug(f"{request.method} {request.url}\n{headers}\n\n{content}")

    def _dump_response(self, response: httpx.Response, log: logging.LoggerAdapter) -> None:
        headers = "\n".join(f"{k}: {v}" for k, v in response.headers.items())
        log.debug(f"HTTP {response.status_code}\n{headers}\n\n{response.text}")

    def __repr__(self) -> str:
        return f"XeroProvider(tenant_id={self.tenant_id!r}, base_url={self.base_url!r})"


