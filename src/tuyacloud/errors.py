"""
Custom exceptions raised (or returned inside a ``Result``) by the tuyacloud client.
"""

from collections.abc import Mapping
from typing import Any

from ._constants import SDK_ERROR_CODE


class TuyaCloudError(Exception):
    """
    Base exception for all errors produced by ``tuyacloud``.

    Attributes:
        code: SDK or upstream error code, ``None`` when the failure has no code.
        message: Human readable message.
    """

    def __init__(self, code: str | int | None = None, message: str | None = None) -> None:
        self.code = code
        self.message = message or ""
        if code is None:
            super().__init__(self.message)
        else:
            super().__init__(f"{code}: {self.message}")


class ConfigurationError(TuyaCloudError):
    """Raised when client credentials were never configured."""

    def __init__(self, message: str = "client_id and secret must be configured") -> None:
        super().__init__(SDK_ERROR_CODE, message)


class ParameterError(TuyaCloudError):
    """Raised when a request is missing its method, path or output sink."""

    def __init__(self, message: str = "invalid request parameters") -> None:
        super().__init__(SDK_ERROR_CODE, message)


class TransportError(TuyaCloudError):
    """Raised when the underlying HTTP transport failed before receiving a usable response."""

    def __init__(self, message: str) -> None:
        super().__init__(None, message)


class ParseError(TuyaCloudError):
    """Raised when the response body is not valid JSON."""

    def __init__(self, message: str, body: str | None = None) -> None:
        self.body = body
        super().__init__(None, message)


class ApplicationError(TuyaCloudError):
    """
    Raised when the platform answered with ``success: false``.

    Attributes:
        code: Numeric application error code from the payload.
        message: Message looked up from the error catalog.
        payload: The full parsed JSON payload.
    """

    def __init__(
        self,
        code: int | str | None,
        message: str,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        self.payload = payload
        super().__init__(code, message)


class AuthExpiredError(ApplicationError):
    """The access token is expired or invalid and must be refreshed."""
