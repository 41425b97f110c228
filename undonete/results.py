"""Execution results returned by command handlers.

A handler's ``execute`` reports its outcome as one of two frozen
dataclasses.  :class:`Success` carries the handler's result payload and an
optional ``had_effect`` flag; :class:`Failure` carries a message meant for
the host application to display or log.  ``success`` is the tag callers
branch on, mirroring how results are consumed elsewhere in the package::

    result = manager.execute_command("addRectangle", instruction, model)
    if not result.success:
        show_error(result.error_message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful execution, optionally flagged as having had no effect."""

    result: T = None
    had_effect: Optional[bool] = None

    @property
    def success(self) -> Literal[True]:
        return True

    @property
    def is_effectful(self) -> bool:
        """Return whether the execution must be recorded in history.

        An omitted flag counts as an effect; only an explicit ``False``
        keeps the command out of history.
        """

        return self.had_effect is None or bool(self.had_effect)


@dataclass(frozen=True)
class Failure:
    """Expected failure of a command, never recorded in history."""

    error_message: str

    @property
    def success(self) -> Literal[False]:
        return False


ExecutionResult = Union[Success[T], Failure]


def success(result: Any = None, had_effect: Optional[bool] = None) -> Success[Any]:
    """Shorthand for :class:`Success` used by handler implementations."""

    return Success(result=result, had_effect=had_effect)


def no_effect(result: Any = None) -> Success[Any]:
    """Return a success that must stay out of the undo history."""

    return Success(result=result, had_effect=False)


def failure(error_message: str) -> Failure:
    """Shorthand for :class:`Failure`."""

    return Failure(error_message=str(error_message))


def is_execution_result(value: Any) -> bool:
    """Return whether *value* honours the ``execute`` return contract."""

    return isinstance(value, (Success, Failure))
