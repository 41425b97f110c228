"""Qt bridge publishing command history changes as signals.

Editors built on PySide6 usually enable or disable their undo/redo actions
from the manager's state.  :class:`QtHistoryNotifier` listens to a
:class:`LinearCommandManager` and re-emits its changes as Qt signals so
those actions can be wired declaratively::

    notifier = QtHistoryNotifier(manager, parent=window)
    notifier.canUndoChanged.connect(undo_action.setEnabled)
    notifier.canRedoChanged.connect(redo_action.setEnabled)
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from .manager import LinearCommandManager


class QtHistoryNotifier(QObject):
    """Emit Qt signals whenever a manager's history changes."""

    historyChanged = Signal()
    canUndoChanged = Signal(bool)
    canRedoChanged = Signal(bool)

    def __init__(self, manager: LinearCommandManager, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._manager: Optional[LinearCommandManager] = manager
        self._can_undo = manager.can_undo()
        self._can_redo = manager.can_redo()
        manager.add_listener(self._on_history_changed)

    @property
    def can_undo(self) -> bool:
        return self._can_undo

    @property
    def can_redo(self) -> bool:
        return self._can_redo

    def detach(self) -> None:
        """Stop listening to the manager. Safe to call more than once."""

        if self._manager is not None:
            self._manager.remove_listener(self._on_history_changed)
            self._manager = None

    def _on_history_changed(self) -> None:
        manager = self._manager
        if manager is None:  # pragma: no cover - listener removed on detach
            return
        can_undo = manager.can_undo()
        can_redo = manager.can_redo()
        if can_undo != self._can_undo:
            self._can_undo = can_undo
            self.canUndoChanged.emit(can_undo)
        if can_redo != self._can_redo:
            self._can_redo = can_redo
            self.canRedoChanged.emit(can_redo)
        self.historyChanged.emit()
