"""
Turns an ``ApiRequest`` or ``FileRequest`` into a signed transport call and maps
whatever comes back into a ``Result``.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

from .api_request import (
    AbstractApiRequest,
    ApiRequest,
    FileRequest,
    HttpMethod,
    TransportRequest,
)
from .client_types import TokenStore, Transport
from .config import ClientConfig
from .error_code import UNKNOWN_ERROR, get_error
from .errors import (
    ApplicationError,
    AuthExpiredError,
    ConfigurationError,
    ParameterError,
    ParseError,
    TransportError,
    TuyaCloudError,
)
from .headers import build_headers
from .query import canonical_query
from .result import Result
from .telemetry.log import bound_logging_vars


def _matches_code(code: Any, expected: int) -> bool:
    try:
        return int(code) == expected
    except (TypeError, ValueError):
        return False


class RequestDispatcher:
    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        token_store: TokenStore | None = None,
        error_lookup: Callable[[Any], str] = get_error,
    ) -> None:
        self._config = config
        self._transport = transport
        self._token_store = token_store
        self._error_lookup = error_lookup

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def execute(self, request: AbstractApiRequest, with_token: bool = False) -> Result:
        if not self._config.has_credentials():
            return Result.reject(ConfigurationError())

        try:
            prepared, extra_headers = self._prepare(request)
        except ParameterError as exc:
            return Result.reject(exc)

        with bound_logging_vars(method=prepared.method, path=prepared.path):
            try:
                prepared.headers = await build_headers(
                    self._config,
                    self._token_store,
                    prepared,
                    with_token,
                    extra=extra_headers,
                )
            except TuyaCloudError as exc:
                # Already logged where the token store produced it
                return Result(error=exc)

            if isinstance(request, FileRequest):
                return await self._dispatch_file(prepared, request)
            return await self._dispatch_api(prepared)

    def _prepare(
        self, request: AbstractApiRequest
    ) -> tuple[TransportRequest, Mapping[str, str] | None]:
        if isinstance(request, ApiRequest):
            method = HttpMethod.parse(request.method)
            if method is None:
                raise ParameterError("Method only support GET, POST, PUT, DELETE")
            if not request.path:
                raise ParameterError("request path is required")
            body = None
            if request.body is not None:
                try:
                    body = json.dumps(request.body, separators=(",", ":"), ensure_ascii=False)
                except (TypeError, ValueError) as exc:
                    raise ParameterError(f"request body is not JSON serializable: {exc}") from exc
            prepared = TransportRequest(
                method=method.value,
                host=self._config.endpoint,
                path=request.path + canonical_query(request.query),
                body=body,
            )
            return prepared, request.headers

        if isinstance(request, FileRequest):
            if not request.path:
                raise ParameterError("request path is required")
            if request.sink is None:
                raise ParameterError("file requests need an output sink")
            prepared = TransportRequest(
                method=HttpMethod.GET.value,
                host=self._config.asset_endpoint,
                path=request.path,
            )
            return prepared, None

        raise ParameterError(f"unsupported request type: {type(request).__name__}")

    async def _dispatch_api(self, prepared: TransportRequest) -> Result:
        try:
            raw = await self._transport.do_request(prepared, timeout=self._config.timeout)
        except TransportError as exc:
            return Result.reject(exc)

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as exc:
            return Result.reject(ParseError(f"response is not valid JSON: {exc}", body=raw))
        if not isinstance(payload, Mapping):
            return Result.reject(ParseError("response is not a JSON object", body=raw))

        if not payload.get("success"):
            code = payload.get("code")
            message = self._error_lookup(code)
            if message == UNKNOWN_ERROR and payload.get("msg"):
                message = str(payload["msg"])
            if _matches_code(code, self._config.token_expired_code):
                return Result.reject(AuthExpiredError(code, message, payload=payload))
            return Result.reject(ApplicationError(code, message, payload=payload))

        return Result.resolve(dict(payload))

    async def _dispatch_file(self, prepared: TransportRequest, request: FileRequest) -> Result:
        try:
            written = await self._transport.do_file_request(
                prepared, request.sink, timeout=self._config.timeout
            )
        except TransportError as exc:
            return Result.reject(exc)
        return Result.resolve(written)
