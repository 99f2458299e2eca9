from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Status(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


class ErrorDetail(BaseModel):
    field: str = ""
    message: str


class APIResponse(BaseModel, Generic[T]):
    status: Status
    results: Optional[T] = None
    errors: List[ErrorDetail] = []

    @classmethod
    def success(cls, results: Any) -> "APIResponse":
        return cls(status=Status.SUCCESS, results=results)

    @classmethod
    def failure(cls, errors: List[ErrorDetail]) -> "APIResponse":
        return cls(status=Status.FAILED, errors=errors)
