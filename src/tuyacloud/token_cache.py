"""
Access-token cache backed by the platform token endpoint.
"""

import asyncio
import time
from collections.abc import Callable, Mapping
from typing import Any

from ._constants import TOKEN_EXPIRY_MARGIN_SECONDS, TOKEN_PATH
from .api_request import ApiRequest, HttpMethod
from .dispatcher import RequestDispatcher
from .errors import ParseError
from .result import Result
from .telemetry.log import LOG


class TokenCache:
    """
    Caches the access token until it expires or is invalidated.

    A fresh token is obtained with ``GET /v1.0/token?grant_type=1``. Once a
    refresh token is known, expired tokens are renewed through
    ``GET /v1.0/token/{refresh_token}`` first, falling back to a new grant if the
    refresh is rejected. Concurrent callers share a single fetch.
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        clock: Callable[[], float] = time.monotonic,
        expiry_margin: float = TOKEN_EXPIRY_MARGIN_SECONDS,
    ) -> None:
        self._dispatcher = dispatcher
        self._clock = clock
        self._expiry_margin = expiry_margin
        self._access_token: str | None = None
        self._refresh_token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def refresh_token(self) -> str | None:
        return self._refresh_token

    def _is_valid(self) -> bool:
        return self._access_token is not None and self._clock() < self._expires_at

    def invalidate(self) -> None:
        if self._access_token is not None:
            LOG.info("Access token invalidated")
        self._access_token = None
        self._expires_at = 0.0

    async def get_token(self) -> str:
        if self._is_valid():
            return self._access_token
        async with self._lock:
            if self._is_valid():
                return self._access_token
            result = await self._fetch()
            self._store(result.unwrap())
            return self._access_token

    async def _fetch(self) -> Result:
        if self._refresh_token:
            result = await self._dispatcher.execute(
                ApiRequest(HttpMethod.GET, f"{TOKEN_PATH}/{self._refresh_token}")
            )
            if result.ok():
                LOG.info("Access token refreshed")
                return result
            LOG.warning(f"Token refresh failed, requesting a new grant: {result.error}")
            self._refresh_token = None

        result = await self._dispatcher.execute(
            ApiRequest(HttpMethod.GET, TOKEN_PATH, query={"grant_type": 1})
        )
        if result.ok():
            LOG.info("Access token granted")
        return result

    @staticmethod
    def _malformed(message: str) -> ParseError:
        LOG.error(f"Malformed token response: {message}")
        return ParseError(message)

    def _store(self, payload: Mapping[str, Any]) -> None:
        token_info = payload.get("result") or {}
        if not isinstance(token_info, Mapping):
            raise self._malformed("token response result is not an object")
        access_token = token_info.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise self._malformed("token response carries no access_token")
        try:
            expire_time = float(token_info.get("expire_time") or 0)
        except (TypeError, ValueError) as exc:
            raise self._malformed(f"invalid expire_time: {exc}") from exc
        self._access_token = access_token
        self._refresh_token = token_info.get("refresh_token") or self._refresh_token
        self._expires_at = self._clock() + max(expire_time - self._expiry_margin, 0.0)
