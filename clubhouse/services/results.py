"""Typed outcomes for the event lifecycle operations."""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    unauthorized = "unauthorized"
    invalid_payload = "invalid_payload"
    not_found = "not_found"
    storage_error = "storage_error"


@dataclass(frozen=True)
class OperationError:
    kind: ErrorKind
    message: str
    # invalid_payload: first failing field; unauthorized: "permission" when
    # the actor is known but lacks the permission
    field: Optional[str] = None


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or exactly one ``OperationError``."""

    value: Optional[T] = None
    error: Optional[OperationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, field: Optional[str] = None) -> "Result[T]":
        return cls(error=OperationError(kind=kind, message=message, field=field))
