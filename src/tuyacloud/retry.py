"""
Retry policy for token-bearing calls.

An attempt whose error matches the predicate invalidates the token store, so the
next attempt signs with a freshly fetched token. Every other outcome is final.
"""

import logging
from collections.abc import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ._constants import DEFAULT_TOKEN_RETRY_ATTEMPTS
from .client_types import TokenStore
from .errors import AuthExpiredError, TuyaCloudError
from .result import Result
from .telemetry.log import LOG


def is_token_expired(error: TuyaCloudError | None) -> bool:
    return isinstance(error, AuthExpiredError)


def _last_result(retry_state: RetryCallState) -> Result:
    return retry_state.outcome.result()


class TokenRetryPolicy:
    def __init__(
        self,
        token_store: TokenStore,
        attempts: int = DEFAULT_TOKEN_RETRY_ATTEMPTS,
        wait: float = 0.0,
        predicate: Callable[[TuyaCloudError | None], bool] = is_token_expired,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self._token_store = token_store
        self._attempts = attempts
        self._wait = wait
        self._predicate = predicate

    def _should_retry(self, result: Result) -> bool:
        return self._predicate(result.error)

    async def run(self, attempt: Callable[[], Awaitable[Result]]) -> Result:
        async def _attempt() -> Result:
            result = await attempt()
            if self._should_retry(result):
                self._token_store.invalidate()
            return result

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_fixed(self._wait),
            retry=retry_if_result(self._should_retry),
            before_sleep=before_sleep_log(LOG, logging.WARNING),
            retry_error_callback=_last_result,
        )
        return await retrying(_attempt)
