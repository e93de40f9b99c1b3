"""Bearer credential attachment for outgoing requests.

Obtaining and refreshing OAuth2 tokens is left to the caller: pass either a
token string or a callable (plain or async) that returns a currently valid one.
"""

import inspect
from typing import AsyncGenerator, Awaitable, Callable, Generator, Union

import httpx

TokenSource = Union[str, Callable[[], Union[str, Awaitable[str]]]]


class BearerAuth(httpx.Auth):
    """httpx auth flow adding ``Authorization: Bearer <token>``."""

    def __init__(self, token: TokenSource) -> None:
        self._token = token

    def _sync_token(self) -> str:
        if isinstance(self._token, str):
            return self._token
        token = self._token()
        if inspect.isawaitable(token):
            if inspect.iscoroutine(token):
                token.close()
            raise RuntimeError("Async token source used with a sync client")
        return token

    async def _async_token(self) -> str:
        if isinstance(self._token, str):
            return self._token
        token = self._token()
        if inspect.isawaitable(token):
            token = await token
        return token

    def sync_auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._sync_token()}"
        yield request

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        request.headers["Authorization"] = f"Bearer {await self._async_token()}"
        yield request
