"""Card, undo-history, level-configuration and game-state models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from itertools import chain
from typing import Tuple

Position = Tuple[float, float]


class CardZone(Enum):
    """Area of the table a card currently belongs to."""

    PLAYFIELD = "playfield"
    STACK = "stack"
    HAND = "hand"
    UNKNOWN = "unknown"


class CardSuitType(IntEnum):
    """Card suit; the numeric values match the level file format."""

    NONE = -1
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class CardFaceType(IntEnum):
    """Card rank; the numeric values match the level file format."""

    NONE = -1
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12


@dataclass
class CardModel:
    """A single card: rank, suit, table position, identifier and zone."""

    face: CardFaceType = CardFaceType.ACE
    suit: CardSuitType = CardSuitType.SPADES
    position: Position = (0.0, 0.0)
    id: int | None = None
    zone: CardZone = CardZone.UNKNOWN


@dataclass(frozen=True)
class UndoCardState:
    """Where a card was, and in which zone, before it was moved."""

    id: int | None
    position: Position
    zone: CardZone


class UndoModel:
    """Last-in, first-out history of card moves."""

    def __init__(self) -> None:
        self._history: list[UndoCardState] = []

    def record(self, state: UndoCardState) -> None:
        """Append a snapshot taken before a move."""
        self._history.append(state)

    def undo(self) -> UndoCardState | None:
        """Remove and return the most recent snapshot, or None if there is none."""
        return self._history.pop() if self._history else None

    def clear_history(self) -> None:
        """Forget every recorded snapshot."""
        self._history.clear()

    def can_undo(self) -> bool:
        """Whether there is at least one snapshot to go back to."""
        return bool(self._history)

    def __len__(self) -> int:
        return len(self._history)


@dataclass
class LevelConfig:
    """Static layout of a level: the playfield cards and the stack cards."""

    playfield: list[CardModel] = field(default_factory=list)
    stack: list[CardModel] = field(default_factory=list)


def _remove_by_id(cards: list[CardModel], card_id: int) -> None:
    for index, card in enumerate(cards):
        if card.id == card_id:
            del cards[index]
            return


class GameModel:
    """Run-time state of a game: the cards of both zones and the undo history."""

    def __init__(self, config: LevelConfig | None) -> None:
        self.playfield: list[CardModel] = []
        self.stackfield: list[CardModel] = []
        self.undo_model = UndoModel()
        if config is not None:
            self.playfield = [replace(card) for card in config.playfield]
            self.stackfield = [replace(card) for card in config.stack]

    def add_card_to_playfield(self, card: CardModel) -> None:
        """Append a card to the playfield."""
        self.playfield.append(card)

    def add_card_to_stackfield(self, card: CardModel) -> None:
        """Append a card to the stack."""
        self.stackfield.append(card)

    def remove_card_from_playfield(self, card_id: int) -> None:
        """Remove the first playfield card with this id, if any."""
        _remove_by_id(self.playfield, card_id)

    def remove_card_from_stackfield(self, card_id: int) -> None:
        """Remove the first stack card with this id, if any."""
        _remove_by_id(self.stackfield, card_id)

    def find_card(self, card_id: int) -> CardModel | None:
        """Return the card with this id, looking in the playfield before the stack."""
        return next(
            (card for card in chain(self.playfield, self.stackfield) if card.id == card_id),
            None,
        )