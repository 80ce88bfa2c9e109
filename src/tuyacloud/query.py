"""
Query string canonicalization.

The platform signs the path together with its query string, and requires the
query keys in alphabetical order. Nothing here percent-encodes: callers that
need encoding must apply it before the request is signed.
"""

from collections.abc import Mapping
from typing import Any

from .errors import ParameterError


def _value_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def canonical_query(query: str | Mapping[str, Any] | None) -> str:
    if query is None:
        return ""
    if isinstance(query, str):
        if not query:
            return ""
        return query if query.startswith("?") else f"?{query}"
    if isinstance(query, Mapping):
        try:
            keys = sorted(query)
        except TypeError as exc:
            raise ParameterError(f"query keys must be mutually comparable: {exc}") from exc
        # An empty mapping still yields a bare "?"
        pairs = [f"{key}={_value_to_str(query[key])}" for key in keys]
        return "?" + "&".join(pairs)
    raise ParameterError(f"unsupported query type: {type(query).__name__}")
