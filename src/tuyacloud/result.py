from pydantic import BaseModel, ConfigDict
from typing import Generic, TypeVar, Optional
from .errors import TuyaCloudError
from .telemetry.log import LOG

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: Optional[T] = None
    error: Optional[TuyaCloudError] = None

    @classmethod
    def resolve(cls, data: T) -> "Result[T]":
        return cls(data=data, error=None)

    @classmethod
    def reject(cls, error: TuyaCloudError) -> "Result[T]":
        assert error is not None, "error must not be None"
        LOG.error(f"[{type(error).__name__}] {error}")
        return cls(data=None, error=error)

    def unpack(self) -> tuple[Optional[T], Optional[TuyaCloudError]]:
        if self.error is not None:
            return None, self.error
        return self.data, None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.data

    def ok(self) -> bool:
        return self.error is None
