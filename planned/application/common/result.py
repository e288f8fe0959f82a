"""
Tagged result type for interactive use cases.

Expected business failures (not found, forbidden, not linked, ...) are
returned as ``Result.fail(code, message)`` instead of being raised.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResultError:
    code: str
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    success: bool
    data: T | None = None
    error: ResultError | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "Result[T]":
        return cls(success=False, error=ResultError(code=code, message=message))

    @property
    def code(self) -> str | None:
        return self.error.code if self.error else None
