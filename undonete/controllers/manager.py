"""Linear command manager with undo/redo history.

This module introduces :class:`LinearCommandManager`, the service layer that
dispatches instructions to the handlers of a :class:`CommandRegistry` and
keeps the two history stacks.  Successful, effectful executions are recorded
as :class:`DoneCommand` entries which capture everything the handler needs
to reverse or replay the mutation, so undo and redo never recompute a
result against a model whose shape may have changed since.

The manager never owns the model; every call receives it by reference.
History is strictly linear: executing a new effectful command after one or
more undos discards the redo stack.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .. import config
from ..errors import InvalidHandlerError, UnknownCommandError
from ..handlers import CommandHandler, CommandRegistry, HandlerParams
from ..results import ExecutionResult, Failure, Success, is_execution_result

M = TypeVar("M")

logger = logging.getLogger(f"{config.LOGGER_NAME}.manager")


@dataclass(frozen=True)
class Command:
    """A command type paired with its instruction, not yet executed."""

    command_type: str
    instruction: Any


@dataclass(frozen=True)
class DoneCommand:
    """History entry for one successful, effectful execution."""

    command_type: str
    instruction: Any
    execution_result: Any


class CommandAccessor:
    """Table of per-command-type closures over ``execute_command``.

    ``manager.commands.addRectangle(instruction, model)`` and
    ``manager.commands["addRectangle"](instruction, model)`` are equivalent
    to ``manager.execute_command("addRectangle", instruction, model)``.
    Command types that would be shadowed by the accessor's own attributes
    are rejected.
    """

    def __init__(self, manager: "LinearCommandManager", command_types: Iterable[str]) -> None:
        reserved = set(dir(type(self))) | {"_dispatch"}
        shadowed = sorted(reserved.intersection(command_types))
        if shadowed:
            raise InvalidHandlerError(
                f"Command types {shadowed!r} clash with attributes of the commands accessor"
            )
        self._dispatch: Dict[str, Callable[[Any, Any], ExecutionResult]] = {
            command_type: self._bind(manager, command_type)
            for command_type in command_types
        }

    @staticmethod
    def _bind(manager: "LinearCommandManager", command_type: str) -> Callable[[Any, Any], ExecutionResult]:
        def dispatch(instruction: Any, model: Any) -> ExecutionResult:
            return manager.execute_command(command_type, instruction, model)

        dispatch.__name__ = command_type
        dispatch.__qualname__ = f"commands.{command_type}"
        return dispatch

    def __getattr__(self, command_type: str) -> Callable[[Any, Any], ExecutionResult]:
        dispatch = self.__dict__.get("_dispatch", {})
        try:
            return dispatch[command_type]
        except KeyError:
            raise AttributeError(f"No command registered as {command_type!r}") from None

    def __getitem__(self, command_type: str) -> Callable[[Any, Any], ExecutionResult]:
        try:
            return self._dispatch[command_type]
        except KeyError:
            raise UnknownCommandError(command_type) from None

    def __contains__(self, command_type: object) -> bool:
        return command_type in self._dispatch

    def __iter__(self) -> Iterator[str]:
        return iter(self._dispatch)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._dispatch))


class LinearCommandManager(Generic[M]):
    """Dispatch commands to a registry and manage linear undo/redo history."""

    def __init__(
        self,
        registry: Mapping,
        *,
        history_limit: Optional[int] = config.DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if history_limit is not None and history_limit <= 0:
            raise ValueError("history_limit must be greater than zero")
        self._registry = CommandRegistry.coerce(registry)
        self._history_limit = history_limit
        self._undo_stack: List[DoneCommand] = []
        self._redo_stack: List[DoneCommand] = []
        self._listeners: List[Callable[[], None]] = []
        self._commands = CommandAccessor(self, self._registry)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def history_limit(self) -> Optional[int]:
        return self._history_limit

    @property
    def commands(self) -> CommandAccessor:
        """Dispatch-by-name surface, one callable per registered command type."""

        return self._commands

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def execute_command(self, command_type: str, instruction: Any, model: M) -> ExecutionResult:
        """Execute *instruction* on *model* with the handler for *command_type*.

        Failures are returned unchanged and never recorded.  Successes whose
        ``had_effect`` is explicitly ``False`` are returned without touching
        either stack.  Any other success prunes the redo stack and is pushed
        onto the undo stack.
        """

        handler = self._registry[command_type]
        result = handler.execute(model, instruction)

        if not is_execution_result(result):
            raise InvalidHandlerError(
                f"Handler for {command_type!r} returned {type(result).__name__}, "
                "expected Success or Failure"
            )
        if isinstance(result, Failure):
            logger.debug("Command %s failed: %s", command_type, result.error_message)
            return result
        if not result.is_effectful:
            logger.debug("Command %s had no effect; history unchanged", command_type)
            return result

        self._clear_redo_stack()
        self._push_undo(DoneCommand(command_type, instruction, result.result))
        logger.debug("Executed %s (undo depth %d)", command_type, len(self._undo_stack))
        self._notify()
        return result

    def execute(self, command: Command, model: M) -> ExecutionResult:
        """Execute a :class:`Command` pair."""

        return self.execute_command(command.command_type, command.instruction, model)

    def execute_all(self, commands: Iterable[Command], model: M) -> List[ExecutionResult]:
        """Execute *commands* in order and return every result.

        A failed command does not stop the batch; inspect the returned
        results to find out which ones were applied.
        """

        return [self.execute(command, model) for command in commands]

    def make_command(self, command_type: str, instruction: Any) -> Command:
        """Build a :class:`Command` after checking *command_type* is registered."""

        if command_type not in self._registry:
            raise UnknownCommandError(command_type)
        return Command(command_type, instruction)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def undo(self, model: M) -> bool:
        """Reverse the most recent command. Returns whether there was one."""

        if not self._undo_stack:
            return False
        command = self._undo_stack[-1]
        self._handler_for(command).undo(self._params(command, model))
        self._redo_stack.append(self._undo_stack.pop())
        logger.debug("Undid %s (redo depth %d)", command.command_type, len(self._redo_stack))
        self._notify()
        return True

    def redo(self, model: M) -> bool:
        """Re-apply the most recently undone command. Returns whether there was one."""

        if not self._redo_stack:
            return False
        command = self._redo_stack[-1]
        result = self._handler_for(command).replay(self._params(command, model))
        if result is not None and not isinstance(result, Success):
            reason = result.error_message if isinstance(result, Failure) else type(result).__name__
            raise InvalidHandlerError(
                f"Re-running {command.command_type!r} did not reapply it: {reason}"
            )
        self._push_undo(self._redo_stack.pop())
        logger.debug("Redid %s (undo depth %d)", command.command_type, len(self._undo_stack))
        self._notify()
        return True

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    def peek_undo(self) -> Optional[DoneCommand]:
        """Return the command the next :meth:`undo` would reverse."""

        return self._undo_stack[-1] if self._undo_stack else None

    def peek_redo(self) -> Optional[DoneCommand]:
        """Return the command the next :meth:`redo` would re-apply."""

        return self._redo_stack[-1] if self._redo_stack else None

    @property
    def undo_history(self) -> Tuple[DoneCommand, ...]:
        """Snapshot of the undo stack, oldest first."""

        return tuple(self._undo_stack)

    @property
    def redo_history(self) -> Tuple[DoneCommand, ...]:
        """Snapshot of the redo stack; the last entry is redone first."""

        return tuple(self._redo_stack)

    def clear(self) -> None:
        """Forget all undo/redo history without touching any model."""

        if not self._undo_stack and not self._redo_stack:
            return
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.debug("History cleared")
        self._notify()

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call *callback* after every operation that changes history."""

        if not callable(callback):
            raise TypeError("callback must be callable")
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _handler_for(self, command: DoneCommand) -> CommandHandler:
        return self._registry[command.command_type]

    @staticmethod
    def _params(command: DoneCommand, model: M) -> HandlerParams[M]:
        return HandlerParams(
            model=model,
            instruction=command.instruction,
            execution_result=command.execution_result,
        )

    def _push_undo(self, command: DoneCommand) -> None:
        self._undo_stack.append(command)
        if self._history_limit is not None and len(self._undo_stack) > self._history_limit:
            dropped = self._undo_stack.pop(0)
            logger.debug("History limit reached; dropped %s", dropped.command_type)

    def _clear_redo_stack(self) -> None:
        if self._redo_stack:
            logger.debug("Discarding %d redoable command(s)", len(self._redo_stack))
            self._redo_stack.clear()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
