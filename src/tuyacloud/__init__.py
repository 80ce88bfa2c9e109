"""
Python SDK for the Tuya cloud OpenAPI.
"""

from importlib import metadata as _metadata

from .api_request import ApiRequest, FileRequest, HttpMethod
from .client import TuyaCloudClient
from .config import ClientConfig, load_config
from .errors import (
    ApplicationError,
    AuthExpiredError,
    ConfigurationError,
    ParameterError,
    ParseError,
    TransportError,
    TuyaCloudError,
)
from .result import Result
from .token_cache import TokenCache

__all__ = [
    "TuyaCloudClient",
    "ApiRequest",
    "FileRequest",
    "HttpMethod",
    "ClientConfig",
    "load_config",
    "Result",
    "TokenCache",
    "TuyaCloudError",
    "ConfigurationError",
    "ParameterError",
    "TransportError",
    "ParseError",
    "ApplicationError",
    "AuthExpiredError",
    "__version__",
]

try:
    __version__ = _metadata.version("tuyacloud")
except _metadata.PackageNotFoundError:  # pragma: no cover - local/checkout usage
    __version__ = "0.0.0"
