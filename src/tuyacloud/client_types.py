"""
Collaborator protocols shared across modules to avoid circular imports.
"""

from typing import Protocol

from .api_request import ByteSink, TransportRequest


class TokenStore(Protocol):
    async def get_token(self) -> str:
        ...

    def invalidate(self) -> None:
        ...


class Transport(Protocol):
    async def do_request(self, req: TransportRequest, *, timeout: float) -> str:
        ...

    async def do_file_request(
        self, req: TransportRequest, sink: ByteSink, *, timeout: float
    ) -> int:
        ...
