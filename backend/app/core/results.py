# backend/app/core/results.py

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from backend.app.core.errors import describe_exception

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str
    error: Any = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def attempt(fn: Callable[..., T], *args, **kwargs) -> "Result[T]":
    """Run fn and wrap its return value in Ok, or the exception it raised in Err."""
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as e:
        return Err(reason=describe_exception(e), error=e)
