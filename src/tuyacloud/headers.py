import time
from collections.abc import Mapping

from ._constants import SIGN_METHOD
from .api_request import HttpMethod, TransportRequest
from .client_types import TokenStore
from .config import ClientConfig
from .sign import calc_sign


def now_millis() -> str:
    return str(int(time.time() * 1000))


async def build_headers(
    config: ClientConfig,
    token_store: TokenStore | None,
    req: TransportRequest,
    with_token: bool,
    extra: Mapping[str, str] | None = None,
    now: str | None = None,
) -> dict[str, str]:
    extra = dict(extra or {})
    headers = {
        "client_id": config.client_id,
        "t": now or now_millis(),
        "sign_method": SIGN_METHOD,
    }

    access_token = None
    if with_token:
        if token_store is None:
            raise ValueError("a token store is required for token-bearing requests")
        access_token = await token_store.get_token()
        headers["access_token"] = access_token

    headers["sign"] = calc_sign(
        config.client_id,
        config.secret,
        headers["t"],
        access_token,
        with_token,
        req,
        {**headers, **extra},
        new_sign_algorithm=config.new_sign_algorithm,
    )

    headers.update(extra)
    if req.method == HttpMethod.POST:
        for name in [k for k in headers if k.lower() == "content-type"]:
            del headers[name]
        headers["Content-Type"] = "application/json"
    return headers
