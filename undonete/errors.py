"""Exceptions raised for contract violations between registry and manager.

Expected command failures are never raised; handlers report them through
:class:`undonete.results.Failure`.  The classes below signal programming
errors that callers are not expected to recover from.
"""

from __future__ import annotations


class UndoneteError(RuntimeError):
    """Base class for errors raised by undonete."""


class UnknownCommandError(UndoneteError, KeyError):
    """Raised when a command type is not present in the registry."""

    def __init__(self, command_type: str) -> None:
        super().__init__(command_type)
        self.command_type = command_type

    def __str__(self) -> str:
        return f"Unknown command type: {self.command_type!r}"


class InvalidHandlerError(UndoneteError, TypeError):
    """Raised when a handler does not honour the execute/undo/redo contract."""
