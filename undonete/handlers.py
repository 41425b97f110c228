"""Command handlers and the registry that binds them to command types.

A handler is the capability triple a command type needs: ``execute`` to
perform the mutation, ``undo`` to reverse it and an optional ``redo`` to
re-apply it from the captured instruction and execution result.  Handlers
hold no state of their own; everything they need to reverse or replay a
mutation arrives through :class:`HandlerParams`.

:class:`CommandRegistry` is the immutable lookup table from command type
to handler.  It validates every entry on construction so that a malformed
registry fails loudly before any manager uses it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, Iterator, Optional, TypeVar

from .errors import InvalidHandlerError, UnknownCommandError
from .results import ExecutionResult

M = TypeVar("M")


@dataclass(frozen=True)
class HandlerParams(Generic[M]):
    """Captured state handed to ``undo`` and ``redo``."""

    model: M
    instruction: Any
    execution_result: Any


@dataclass(frozen=True)
class CommandHandler(Generic[M]):
    """Execute/undo/redo functions bound to one command type."""

    execute: Callable[[M, Any], ExecutionResult]
    undo: Callable[[HandlerParams[M]], None]
    redo: Optional[Callable[[HandlerParams[M]], None]] = None

    def replay(self, params: HandlerParams[M]) -> Optional[ExecutionResult]:
        """Re-apply a previously executed command.

        Handlers without ``redo`` are replayed by running ``execute`` again
        and its result is returned so the caller can check it was applied.
        The captured result in history stays the one recorded originally.
        Returns ``None`` when ``redo`` did the work.
        """

        if self.redo is not None:
            self.redo(params)
            return None
        return self.execute(params.model, params.instruction)


_HANDLER_FIELDS = ("execute", "undo", "redo")


def as_handler(command_type: str, value: Any) -> CommandHandler:
    """Normalise *value* into a :class:`CommandHandler`.

    Accepts handler instances, mappings with ``execute``/``undo``/``redo``
    keys, and any object exposing those attributes (classes, modules,
    namespaces).
    """

    if isinstance(value, CommandHandler):
        handler = value
    else:
        if isinstance(value, Mapping):
            fields = {name: value.get(name) for name in _HANDLER_FIELDS}
        else:
            fields = {name: getattr(value, name, None) for name in _HANDLER_FIELDS}
        handler = CommandHandler(**fields)

    for name in ("execute", "undo"):
        if not callable(getattr(handler, name)):
            raise InvalidHandlerError(
                f"Handler for {command_type!r} must provide a callable {name!r}"
            )
    if handler.redo is not None and not callable(handler.redo):
        raise InvalidHandlerError(
            f"Handler for {command_type!r} has a non-callable 'redo'"
        )
    return handler


class CommandRegistry(Mapping):
    """Immutable mapping from command type to :class:`CommandHandler`."""

    def __init__(self, handlers: Optional[Mapping] = None, **named_handlers: Any) -> None:
        entries: Dict[str, Any] = dict(handlers or {})
        entries.update(named_handlers)
        validated: Dict[str, CommandHandler] = {}
        for command_type, value in entries.items():
            if not isinstance(command_type, str) or not command_type:
                raise InvalidHandlerError(
                    f"Command types must be non-empty strings, got {command_type!r}"
                )
            validated[command_type] = as_handler(command_type, value)
        self._handlers = MappingProxyType(validated)

    def __getitem__(self, command_type: str) -> CommandHandler:
        try:
            return self._handlers[command_type]
        except KeyError:
            raise UnknownCommandError(command_type) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._handlers)!r})"

    @classmethod
    def coerce(cls, registry: Mapping) -> "CommandRegistry":
        """Return *registry* unchanged if already a registry, else wrap it."""

        if isinstance(registry, cls):
            return registry
        return cls(registry)
