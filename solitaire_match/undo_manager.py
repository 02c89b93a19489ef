"""Undo service working on a history of card moves."""

from __future__ import annotations

import copy

from .models import UndoCardState, UndoModel


class UndoManager:
    """Records card states and hands them back in reverse order.

    The manager keeps its own copy of the history it is given, so later
    changes through either one do not affect the other.
    """

    def __init__(self, undo_model: UndoModel) -> None:
        self._undo_model = copy.deepcopy(undo_model)

    def record_undo_state(self, state: UndoCardState) -> None:
        """Remember a card's state before it is moved."""
        self._undo_model.record(state)

    def undo(self) -> UndoCardState | None:
        """Remove and return the latest recorded state, or None if there is none."""
        return self._undo_model.undo()

    def can_undo(self) -> bool:
        """Whether a recorded state is available."""
        return self._undo_model.can_undo()

    def clear_undo_history(self) -> None:
        """Discard every recorded state."""
        self._undo_model.clear_history()

    def __len__(self) -> int:
        return len(self._undo_model)