"""
High-level asynchronous client for the Tuya cloud OpenAPI.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, BinaryIO

import httpx

from .api_request import AbstractApiRequest, ByteSink, FileRequest
from .client_types import TokenStore, Transport
from .config import ClientConfig, load_config
from .dispatcher import RequestDispatcher
from .errors import TuyaCloudError
from .result import Result
from .retry import TokenRetryPolicy
from .telemetry.log import get_logger
from .token_cache import TokenCache
from .transport import HttpConnection

Callback = Callable[[TuyaCloudError | None, Any], Awaitable[None] | None]


class TuyaCloudClient:
    """
    Async client that signs, sends and normalizes OpenAPI calls.

    Example::

        from tuyacloud import ApiRequest, TuyaCloudClient, load_config

        async with TuyaCloudClient(load_config()) as client:
            result = await client.send_request_with_token(
                ApiRequest("GET", "/v1.0/devices/abc123/status")
            )
            status = result.unwrap()

    Every call returns a ``Result``. Pass ``callback`` to additionally receive
    the outcome as ``callback(error, data)``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        token_store: TokenStore | None = None,
        transport: Transport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or load_config()
        get_logger(self._config.logging_format)

        if transport is not None:
            self._transport = transport
            self._owns_transport = False
        else:
            self._transport = HttpConnection(http_client)
            self._owns_transport = True

        if token_store is None:
            token_store = TokenCache(RequestDispatcher(self._config, self._transport))
        self.token_store = token_store

        self._dispatcher = RequestDispatcher(
            self._config, self._transport, token_store=self.token_store
        )
        self._retry_policy = TokenRetryPolicy(
            self.token_store,
            attempts=self._config.token_retry_attempts,
            wait=self._config.token_retry_wait,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "TuyaCloudClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def send_request(
        self, request: AbstractApiRequest, callback: Callback | None = None
    ) -> Result:
        """Execute ``request`` without an access token (token grant, public endpoints)."""
        result = await self._dispatcher.execute(request, with_token=False)
        await _deliver(result, callback)
        return result

    async def send_request_with_token(
        self, request: AbstractApiRequest, callback: Callback | None = None
    ) -> Result:
        """Execute ``request`` with an access token, retrying once the token expires."""
        result = await self._retry_policy.run(
            lambda: self._dispatcher.execute(request, with_token=True)
        )
        await _deliver(result, callback)
        return result

    async def download(
        self,
        path: str,
        sink: ByteSink | BinaryIO,
        callback: Callback | None = None,
    ) -> Result:
        """Stream an asset from the images host into ``sink``."""
        return await self.send_request_with_token(FileRequest(path=path, sink=sink), callback)


async def _deliver(result: Result, callback: Callback | None) -> None:
    if callback is None:
        return
    data, error = result.unpack()
    outcome = callback(error, data)
    if inspect.isawaitable(outcome):
        await outcome
