import asyncio

import pytest

from tuyacloud.config import ClientConfig
from tuyacloud.dispatcher import RequestDispatcher
from tuyacloud.errors import ApplicationError, ParseError
from tuyacloud.token_cache import TokenCache

from conftest import FakeTransport, error_body, ok_body


class Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def token_body(access: str, refresh: str = "refresh-1", expire_time: int = 7200) -> str:
    return ok_body(
        result={"access_token": access, "refresh_token": refresh, "expire_time": expire_time, "uid": "u"}
    )


def make_cache(config: ClientConfig, transport: FakeTransport, clock: Clock) -> TokenCache:
    return TokenCache(RequestDispatcher(config, transport), clock=clock)


@pytest.mark.asyncio
async def test_grant_is_requested_then_cached(config: ClientConfig) -> None:
    transport = FakeTransport([token_body("access-1")])
    cache = make_cache(config, transport, Clock())

    assert await cache.get_token() == "access-1"
    assert await cache.get_token() == "access-1"

    assert len(transport.requests) == 1
    sent = transport.requests[0]
    assert sent.path == "/v1.0/token?grant_type=1"
    assert "access_token" not in sent.headers
    assert cache.refresh_token == "refresh-1"


@pytest.mark.asyncio
async def test_invalidate_uses_refresh_token(config: ClientConfig) -> None:
    transport = FakeTransport([token_body("access-1"), token_body("access-2", refresh="refresh-2")])
    cache = make_cache(config, transport, Clock())

    await cache.get_token()
    cache.invalidate()
    assert cache.access_token is None

    assert await cache.get_token() == "access-2"
    assert transport.requests[1].path == "/v1.0/token/refresh-1"
    assert cache.refresh_token == "refresh-2"


@pytest.mark.asyncio
async def test_expired_token_is_refreshed(config: ClientConfig) -> None:
    clock = Clock()
    transport = FakeTransport([token_body("access-1", expire_time=120), token_body("access-2")])
    cache = make_cache(config, transport, clock)

    await cache.get_token()
    clock.now += 61
    assert await cache.get_token() == "access-2"
    assert len(transport.requests) == 2


@pytest.mark.asyncio
async def test_failed_refresh_falls_back_to_grant(config: ClientConfig) -> None:
    transport = FakeTransport(
        [token_body("access-1"), error_body(1010), token_body("access-3", refresh="refresh-3")]
    )
    cache = make_cache(config, transport, Clock())

    await cache.get_token()
    cache.invalidate()

    assert await cache.get_token() == "access-3"
    assert [r.path for r in transport.requests] == [
        "/v1.0/token?grant_type=1",
        "/v1.0/token/refresh-1",
        "/v1.0/token?grant_type=1",
    ]


@pytest.mark.asyncio
async def test_grant_failure_raises(config: ClientConfig) -> None:
    transport = FakeTransport([error_body(1001)])
    cache = make_cache(config, transport, Clock())

    with pytest.raises(ApplicationError) as ctx:
        await cache.get_token()
    assert ctx.value.code == 1001


@pytest.mark.asyncio
async def test_missing_access_token_raises(config: ClientConfig) -> None:
    transport = FakeTransport([ok_body(result={})])
    cache = make_cache(config, transport, Clock())

    with pytest.raises(ParseError):
        await cache.get_token()


@pytest.mark.asyncio
async def test_non_numeric_expire_time_raises_parse_error(config: ClientConfig) -> None:
    transport = FakeTransport([ok_body(result={"access_token": "a", "expire_time": "soon"})])
    cache = make_cache(config, transport, Clock())

    with pytest.raises(ParseError):
        await cache.get_token()
    assert cache.access_token is None


@pytest.mark.asyncio
async def test_non_object_result_raises_parse_error(config: ClientConfig) -> None:
    transport = FakeTransport([ok_body(result=["a"])])
    cache = make_cache(config, transport, Clock())

    with pytest.raises(ParseError):
        await cache.get_token()


class SlowTransport(FakeTransport):
    async def do_request(self, req, *, timeout: float) -> str:
        await asyncio.sleep(0.01)
        return await super().do_request(req, timeout=timeout)


@pytest.mark.asyncio
async def test_concurrent_first_calls_share_one_fetch(config: ClientConfig) -> None:
    transport = SlowTransport([token_body("access-1")])
    cache = make_cache(config, transport, Clock())

    tokens = await asyncio.gather(cache.get_token(), cache.get_token(), cache.get_token())

    assert tokens == ["access-1", "access-1", "access-1"]
    assert len(transport.requests) == 1
