"""
HMAC-SHA256 request signatures.

v1 signs ``client_id + [access_token] + t``. The newer algorithm appends the
HTTP method, the body digest, the declared signature header names and the
request path, one per line.
"""

import hashlib
import hmac
from collections.abc import Mapping

from ._constants import SIGNATURE_HEADERS
from .api_request import TransportRequest
from .telemetry.log import LOG


def hash_sha256(content: str | bytes | None) -> str:
    if content is None:
        content = ""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def encrypt_sha256(message: str, secret: str) -> str:
    return (
        hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256)
        .hexdigest()
        .upper()
    )


def signed_header_names(headers: Mapping[str, str]) -> str:
    declared = headers.get(SIGNATURE_HEADERS) or ""
    return "".join(name for name in declared.split(":") if name)


def string_to_sign(req: TransportRequest, headers: Mapping[str, str]) -> str:
    return "\n".join(
        [
            req.method.upper(),
            hash_sha256(req.body),
            signed_header_names(headers),
            req.path or "",
        ]
    )


def calc_sign(
    client_id: str,
    secret: str,
    t: str | int,
    access_token: str | None,
    with_token: bool,
    req: TransportRequest | None = None,
    headers: Mapping[str, str] | None = None,
    new_sign_algorithm: bool = False,
) -> str:
    if with_token:
        message = f"{client_id}{access_token}{t}"
    else:
        message = f"{client_id}{t}"

    if new_sign_algorithm:
        if req is None or headers is None:
            LOG.error(
                "new_sign_algorithm needs the request and headers to calculate the signature"
            )
        else:
            message += string_to_sign(req, headers)

    return encrypt_sha256(message, secret)
