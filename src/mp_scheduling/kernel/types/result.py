"""Outcome variants returned by a job's ``execute`` - ``Ok`` and ``Err``.

Both variants optionally carry the job-owned ``state`` the job wants stored
for its next run.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, NoReturn, TypeVar

from mp_scheduling.kernel.errors import ResultError

T = TypeVar("T")
E = TypeVar("E")

_UNSET: Any = object()


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_state", "_value")

    def __init__(self, value: T, state: Any = None) -> None:
        self._value = value
        self._state = state

    @property
    def value(self) -> T:
        return self._value

    @property
    def state(self) -> Any:
        return self._state

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], Any]) -> "Ok[Any]":
        return Ok(func(self._value), self._state)

    def with_state(self, state: Any = _UNSET) -> "Ok[T]":
        """Return a copy carrying *state* (or no state when omitted)."""
        return Ok(self._value, None if state is _UNSET else state)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value and other._state == self._state

    def __hash__(self) -> int:
        return hash(("ok", repr(self._value)))

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Error result variant.

    ``error`` is the job-supplied reason; it need not be an exception.
    """

    __slots__ = ("_error", "_state")

    def __init__(self, error: E, state: Any = None) -> None:
        self._error = error
        self._state = state

    @property
    def error(self) -> E:
        return self._error

    @property
    def state(self) -> Any:
        return self._state

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        if isinstance(self._error, BaseException):
            raise self._error
        raise ResultError(self._error)

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, func: Callable[[Any], Any]) -> "Err[E]":  # noqa: ARG002
        return self

    def with_state(self, state: Any = _UNSET) -> "Err[E]":
        """Return a copy carrying *state* (or no state when omitted)."""
        return Err(self._error, None if state is _UNSET else state)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Err) and other._error == self._error and other._state == self._state

    def __hash__(self) -> int:
        return hash(("err", repr(self._error)))

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
