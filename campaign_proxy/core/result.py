"""Result values returned by the model call wrapper.

The LLM layer reports upstream problems as values instead of raising, so the
HTTP layer decides how a failure is surfaced. `Success` carries the payload,
`Failure` carries a short reason that is only ever logged.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Failure:
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def and_then(self, fn: Callable[[Any], "Result[U]"]) -> "Result[U]":
        return self


Result = Union[Success[T], Failure]
