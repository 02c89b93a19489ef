"""Touch handling for single cards and the id-to-manager registry."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Tuple

from .models import CardModel

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
CardClickedCallback = Callable[[CardModel], None]

_PRESSED_SCALE = 1.1
_NORMAL_SCALE = 1.0


class CardViewLike(Protocol):
    """What a card manager and the controller need from a card's view."""

    scale: float
    z_order: int

    def is_touch_inside(self, point: Point) -> bool: ...

    def move_to(self, position: Point, duration: float) -> None: ...


class CardRegistry:
    """Maps card ids to the managers that handle them."""

    def __init__(self) -> None:
        self._managers: dict[int | None, CardManager] = {}

    def add(self, card_id: int | None, manager: CardManager) -> None:
        """Register a manager for a card id, replacing any earlier one."""
        self._managers[card_id] = manager

    def get(self, card_id: int | None) -> Optional[CardManager]:
        """Return the manager for a card id, or None if none is registered."""
        return self._managers.get(card_id)

    def __len__(self) -> int:
        return len(self._managers)


_DEFAULT_REGISTRY = CardRegistry()


def default_registry() -> CardRegistry:
    """The process-wide registry shared by managers and controllers."""
    return _DEFAULT_REGISTRY


class CardManager:
    """Binds a card model to its view and turns touches into click callbacks."""

    def __init__(self, model: CardModel, registry: CardRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._model = model
        self._view: Optional[CardViewLike] = None
        self._is_selected = False
        self._callback: Optional[CardClickedCallback] = None
        self._registry.add(model.id, self)

    @property
    def model(self) -> CardModel:
        return self._model

    @property
    def view(self) -> Optional[CardViewLike]:
        return self._view

    @property
    def is_selected(self) -> bool:
        return self._is_selected

    def set_card(self, model: CardModel, view: CardViewLike) -> None:
        """Bind a model and its view, and register under the model's id."""
        self._model = model
        self._view = view
        self._registry.add(model.id, self)

    def on_touch_began(self, point: Point) -> bool:
        """Claim a touch that starts on the card and enlarge the card."""
        if self._view is None or not self._view.is_touch_inside(point):
            return False
        logger.debug("touch began on card %s", self._model.id)
        self._view.scale = _PRESSED_SCALE
        self._is_selected = True
        return True

    def on_touch_moved(self, point: Point) -> None:
        """Dragging is not supported; moves are ignored."""

    def on_touch_ended(self, point: Point) -> None:
        """Restore the card's size and report the click."""
        if self._view is None:
            return
        self._view.scale = _NORMAL_SCALE
        if self._callback is not None:
            logger.debug("card %s clicked", self._model.id)
            self._callback(self._model)
        self._is_selected = False

    def on_touch_cancelled(self, point: Point) -> None:
        """Restore the card's size without reporting a click."""
        if self._view is None:
            return
        self._view.scale = _NORMAL_SCALE
        self._is_selected = False

    def set_card_clicked_callback(self, callback: Optional[CardClickedCallback]) -> None:
        """Set the function called with the card model when the card is clicked."""
        self._callback = callback