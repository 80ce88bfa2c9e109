"""
httpx-backed transport for signed requests.
"""

import httpx

from .api_request import ByteSink, TransportRequest
from .errors import TransportError

# httpx raises these outside the HTTPError hierarchy while building or streaming a request
_TRANSPORT_FAILURES = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, UnicodeEncodeError)


def _transport_error(exc: Exception) -> TransportError:
    return TransportError(str(exc) or type(exc).__name__)


class HttpConnection:
    """
    Sends prepared requests over an ``httpx.AsyncClient``.

    Plain requests return the raw body text regardless of HTTP status, since the
    platform reports failures inside the JSON payload. File requests stream the
    body into a sink and fail on an error status or a sink that cannot be written.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, scheme: str = "https") -> None:
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        self._scheme = scheme

    def url_for(self, req: TransportRequest) -> str:
        return f"{self._scheme}://{req.host}{req.path}"

    async def do_request(self, req: TransportRequest, *, timeout: float) -> str:
        try:
            response = await self._client.request(
                method=req.method,
                url=self.url_for(req),
                content=req.body,
                headers=req.headers,
                timeout=timeout,
            )
        except _TRANSPORT_FAILURES as exc:
            raise _transport_error(exc) from exc
        return response.text

    async def do_file_request(
        self, req: TransportRequest, sink: ByteSink, *, timeout: float
    ) -> int:
        written = 0
        try:
            async with self._client.stream(
                req.method,
                self.url_for(req),
                headers=req.headers,
                timeout=timeout,
            ) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    try:
                        sink.write(chunk)
                    except (OSError, ValueError) as exc:
                        raise TransportError(f"failed to write to sink: {exc}") from exc
                    written += len(chunk)
        except _TRANSPORT_FAILURES as exc:
            raise _transport_error(exc) from exc
        return written

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
