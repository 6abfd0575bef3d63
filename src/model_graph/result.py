"""
Result type for fallible operations.

Every storage write, seed import and API handler returns either an ``Ok``
wrapping the produced value or an ``Err`` wrapping the failure. Call sites
narrow with ``is_ok`` / ``is_err`` before touching the payload.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, TypeGuard, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Success variant."""
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failure variant. The error payload is never None."""
    error: E

    def __post_init__(self):
        if self.error is None:
            raise ValueError("Err requires an error payload")

    def unwrap(self):
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(f"Called unwrap on failed Result: {self.error}")


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Wrap a value (including None) as a success."""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Wrap an error object or message as a failure."""
    return Err(error)


def is_ok(result: "Result[T, Any]") -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: "Result[Any, E]") -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
