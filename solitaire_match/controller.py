"""Game rules: matching cards, moving them to the hand and undoing moves."""

from __future__ import annotations

import logging
from typing import Optional

from .card_manager import CardManager, CardRegistry, default_registry
from .models import (
    CardFaceType,
    CardModel,
    CardSuitType,
    CardZone,
    GameModel,
    UndoCardState,
)
from .undo_manager import UndoManager

logger = logging.getLogger(__name__)

HAND_POSITION = (700.0, 400.0)
MOVE_DURATION = 0.5


def is_card_match(card1: CardModel, card2: CardModel) -> bool:
    """Two cards match when their ranks differ by exactly one."""
    return abs(int(card1.face) - int(card2.face)) == 1


class GameController:
    """Coordinates the game model, the undo history and the card views."""

    def __init__(self, game_model: GameModel, registry: CardRegistry | None = None) -> None:
        self._game_model = game_model
        self._registry = registry if registry is not None else default_registry()
        self._undo_manager = UndoManager(game_model.undo_model)
        logger.debug("undo history size: %d", len(self._undo_manager))

    def _manager(self, card: CardModel) -> Optional[CardManager]:
        return self._registry.get(card.id)

    def _record(self, card: CardModel) -> None:
        self._undo_manager.record_undo_state(
            UndoCardState(id=card.id, position=card.position, zone=card.zone)
        )

    def select_card_from_playfield_and_match(self, selected_card: CardModel) -> bool:
        """Move a playfield card to the hand if it matches the current hand card."""
        if len(self._undo_manager) == 0:
            return False
        if not is_card_match(selected_card, self.bottom_card()):
            return False
        self._record(selected_card)
        self.handle_card_clicked(selected_card)
        return True

    def click_stack_card(self, card: CardModel) -> None:
        """Move a stack card to the hand, remembering where it came from."""
        self._record(card)
        self.handle_card_clicked(card)

    def handle_card_clicked(self, card: CardModel) -> None:
        """Move a card that is not yet in the hand onto the hand pile."""
        if card.zone is CardZone.HAND:
            return
        card.zone = CardZone.HAND
        card.position = HAND_POSITION
        manager = self._manager(card)
        if manager is None or manager.view is None:
            return
        logger.debug("moving card %s to the hand", card.id)
        manager.view.move_to(HAND_POSITION, MOVE_DURATION)
        if len(self._undo_manager) != 0:
            last_manager = self._manager(self.bottom_card())
            if last_manager is not None and last_manager.view is not None:
                manager.view.z_order = last_manager.view.z_order + 1

    def undo(self) -> bool:
        """Put the most recently moved card back; False if nothing was moved."""
        state = self._undo_manager.undo()
        if state is None:
            return False
        self._move_card_to_original_position(state)
        return True

    def bottom_card(self) -> CardModel:
        """The card on top of the hand pile, or a default ace of spades if none."""
        state = self._undo_manager.undo()
        if state is not None:
            self._undo_manager.record_undo_state(state)
            card = self._game_model.find_card(state.id)
            if card is not None:
                return card
        return CardModel(CardFaceType.ACE, CardSuitType.SPADES, (0.0, 0.0))

    def handle_label_click(self) -> None:
        """The undo label was clicked."""
        self.undo()

    def _move_card_to_original_position(self, state: UndoCardState) -> None:
        card = self._game_model.find_card(state.id)
        if card is None:
            return
        manager = self._manager(card)
        if manager is None:
            return
        if manager.view is not None:
            manager.view.move_to(state.position, MOVE_DURATION)
        card.position = state.position
        card.zone = state.zone
        if manager.view is not None:
            manager.view.z_order = 0