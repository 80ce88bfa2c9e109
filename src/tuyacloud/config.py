import os
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict
from typing import Any, Literal, Optional, Type

from ._constants import (
    API_HOST_PREFIX,
    ASSET_HOST_PREFIX,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOKEN_RETRY_ATTEMPTS,
    TOKEN_EXPIRED_CODE,
)
from .telemetry.log import LOG

ENV_PREFIX = "TUYA_"
CONFIG_FILE_PATH_ENV = "TUYA_CONFIG_FILE_PATH"
DEFAULT_CONFIG_FILE_PATH = "tuya.yaml"


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Developer credentials, left unset until bootstrap provides them
    client_id: Optional[str] = None
    secret: Optional[str] = None

    endpoint: str = DEFAULT_ENDPOINT
    new_sign_algorithm: bool = False

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    token_retry_attempts: int = DEFAULT_TOKEN_RETRY_ATTEMPTS
    token_retry_wait: float = 0.0
    token_expired_code: int = TOKEN_EXPIRED_CODE

    logging_format: Literal["text", "json"] = "text"

    def has_credentials(self) -> bool:
        return bool(self.client_id) and bool(self.secret)

    @property
    def asset_endpoint(self) -> str:
        return self.endpoint.replace(API_HOST_PREFIX, ASSET_HOST_PREFIX, 1)


def filter_value_from_env(CLS: Type[BaseModel] = ClientConfig) -> dict[str, Any]:
    config_keys = CLS.model_fields.keys()
    env_already_keys = {}
    for key in config_keys:
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}", None)
        if value is None:
            continue
        env_already_keys[key] = value
    return env_already_keys


def filter_value_from_yaml(yaml_string, CLS: Type[BaseModel] = ClientConfig) -> dict[str, Any]:
    yaml_config_data: dict | None = yaml.safe_load(yaml_string)
    if yaml_config_data is None:
        return {}

    yaml_already_keys = {}
    config_keys = CLS.model_fields.keys()
    for key in config_keys:
        value = yaml_config_data.get(key, None)
        if value is None:
            continue
        yaml_already_keys[key] = value
    return yaml_already_keys


def load_config(config_file_path: Optional[str] = None, **overrides: Any) -> ClientConfig:
    """Build a ClientConfig from yaml, then ``TUYA_*`` env vars, then keyword overrides."""
    load_dotenv()

    config_file_path = config_file_path or os.getenv(
        CONFIG_FILE_PATH_ENV, DEFAULT_CONFIG_FILE_PATH
    )
    if not os.path.exists(config_file_path):
        LOG.debug(f"Config yaml does not exist: {config_file_path}")
        config_yaml_string = ""
    else:
        with open(config_file_path) as f:
            config_yaml_string = f.read()

    values = filter_value_from_yaml(config_yaml_string)
    values.update(filter_value_from_env())
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ClientConfig(**values)
