"""Controller layer dispatching commands and managing undo/redo history."""

from .manager import (
    Command,
    CommandAccessor,
    DoneCommand,
    LinearCommandManager,
)

__all__ = [
    "Command",
    "CommandAccessor",
    "DoneCommand",
    "LinearCommandManager",
]
