"""Generic command execution with linear undo/redo over any mutable model."""

import logging

from . import config
from .controllers import Command, CommandAccessor, DoneCommand, LinearCommandManager
from .errors import InvalidHandlerError, UndoneteError, UnknownCommandError
from .handlers import CommandHandler, CommandRegistry, HandlerParams
from .results import ExecutionResult, Failure, Success, failure, no_effect, success

logging.getLogger(config.LOGGER_NAME).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandAccessor",
    "CommandHandler",
    "CommandRegistry",
    "DoneCommand",
    "ExecutionResult",
    "Failure",
    "HandlerParams",
    "InvalidHandlerError",
    "LinearCommandManager",
    "Success",
    "UndoneteError",
    "UnknownCommandError",
    "failure",
    "no_effect",
    "success",
]
