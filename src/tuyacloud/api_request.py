"""
Request variants understood by the dispatcher.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, BinaryIO, Protocol


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: "HttpMethod | str | None") -> "HttpMethod | None":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                return None
        return None


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> Any:
        ...


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """A plain API call whose response is a JSON body carrying a ``success`` flag."""

    method: HttpMethod | str
    path: str
    query: str | Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] | None = None


@dataclass(frozen=True, slots=True)
class FileRequest:
    """A GET-only download streamed into ``sink`` (an image, for instance)."""

    path: str
    sink: ByteSink | BinaryIO | None


AbstractApiRequest = ApiRequest | FileRequest


@dataclass(slots=True)
class TransportRequest:
    method: str
    host: str
    path: str
    body: str | None = None
    headers: dict[str, str] | None = None
