"""Card and table views drawn with pygame.

Positions use the game's coordinate system: the origin is the bottom-left
corner and y grows upwards. Drawing flips y to fit pygame surfaces.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import pygame

from . import resources
from .card_manager import CardManager, CardRegistry, Point
from .controller import GameController
from .models import CardModel, CardZone, GameModel

logger = logging.getLogger(__name__)

Anchor = Tuple[float, float]
ClickCallback = Callable[["CardView"], None]

SMALL_NUMBER_POS: Point = (-80.0, 130.0)
SUIT_ICON_POS: Point = (80.0, 130.0)
BIG_NUMBER_POS: Point = (0.0, 0.0)

_ANCHOR_MIDDLE: Anchor = (0.5, 0.5)
_ANCHOR_TOP_LEFT: Anchor = (0.0, 1.0)
_ANCHOR_TOP_RIGHT: Anchor = (1.0, 1.0)

LABEL_TEXT = "回退"
LABEL_POSITION: Point = (900.0, 400.0)
LABEL_FONT_SIZE = 36
LABEL_COLOR = (255, 255, 255)
LABEL_PRESSED_SCALE = 1.2
CLICKED_OPACITY = 180


def _load_image(resource_dir: str, name: str) -> Optional[pygame.Surface]:
    if not name:
        return None
    path = os.path.join(resource_dir, name)
    try:
        return pygame.image.load(path)
    except (pygame.error, OSError) as exc:
        logger.warning("cannot load image %s: %s", path, exc)
        return None


def _blit(
    surface: pygame.Surface,
    image: pygame.Surface,
    origin: Point,
    scale: float,
    anchor: Anchor,
    local: Point,
    alpha: int,
) -> None:
    width, height = image.get_size()
    left = origin[0] + scale * (local[0] - anchor[0] * width)
    bottom = origin[1] + scale * (local[1] - anchor[1] * height)
    scaled_size = (max(1, round(width * scale)), max(1, round(height * scale)))
    if scaled_size != (width, height):
        image = pygame.transform.scale(image, scaled_size)
    if alpha < 255:
        image = image.copy()
        image.set_alpha(alpha)
    top = surface.get_height() - bottom - scaled_size[1]
    surface.blit(image, (round(left), round(top)))


@dataclass
class _Motion:
    start: Point
    target: Point
    duration: float
    elapsed: float = 0.0


class CardView:
    """Visual representation of one card, bound to a CardManager."""

    def __init__(
        self,
        model: CardModel,
        offset: Point = (0.0, 0.0),
        registry: CardRegistry | None = None,
        resource_dir: str | os.PathLike[str] = ".",
    ) -> None:
        directory = os.fspath(resource_dir)
        background = _load_image(directory, resources.background())
        if background is None:
            raise FileNotFoundError(
                f"card background image not found: {os.path.join(directory, resources.background())}"
            )
        self._background = background
        self.content_size: Tuple[int, int] = background.get_size()
        self.card_manager = CardManager(model, registry)
        self._small_number = _load_image(
            directory, resources.small_number_resource(model.suit, model.face)
        )
        self._big_number = _load_image(
            directory, resources.big_number_resource(model.suit, model.face)
        )
        self._suit_icon = _load_image(directory, resources.suit_resource(model.suit))
        self.position: Point = (model.position[0] + offset[0], model.position[1] + offset[1])
        self.scale = 1.0
        self.z_order = 0
        self.opacity = 255
        self._click_callback: Optional[ClickCallback] = None
        self._motion: Optional[_Motion] = None
        self.card_manager.set_card(model, self)

    @property
    def is_moving(self) -> bool:
        return self._motion is not None

    def set_click_callback(self, callback: Optional[ClickCallback]) -> None:
        """Set the function called with this view when the card is clicked."""
        self._click_callback = callback

        def on_clicked(_model: CardModel) -> None:
            if callback is not None:
                callback(self)

        self.card_manager.set_card_clicked_callback(on_clicked)

    def is_touch_inside(self, point: Point) -> bool:
        """Whether a point, in table coordinates, lies on the card background."""
        local_x = (point[0] - self.position[0]) / self.scale
        local_y = (point[1] - self.position[1]) / self.scale
        half_width = self.content_size[0] / 2
        half_height = self.content_size[1] / 2
        return -half_width <= local_x <= half_width and -half_height <= local_y <= half_height

    def move_to(self, position: Point, duration: float) -> None:
        """Start moving the card to a position over the given number of seconds."""
        target = (float(position[0]), float(position[1]))
        if duration <= 0:
            self.position = target
            self._motion = None
            return
        self._motion = _Motion(start=self.position, target=target, duration=duration)

    def update(self, dt: float) -> None:
        """Advance any running movement by dt seconds."""
        motion = self._motion
        if motion is None:
            return
        motion.elapsed += dt
        progress = min(1.0, motion.elapsed / motion.duration)
        self.position = (
            motion.start[0] + (motion.target[0] - motion.start[0]) * progress,
            motion.start[1] + (motion.target[1] - motion.start[1]) * progress,
        )
        if progress >= 1.0:
            self.position = motion.target
            self._motion = None

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the background and whichever rank and suit images were found."""
        layers = (
            (self._background, _ANCHOR_MIDDLE, (0.0, 0.0)),
            (self._small_number, _ANCHOR_TOP_LEFT, SMALL_NUMBER_POS),
            (self._big_number, _ANCHOR_MIDDLE, BIG_NUMBER_POS),
            (self._suit_icon, _ANCHOR_TOP_RIGHT, SUIT_ICON_POS),
        )
        for image, anchor, local in layers:
            if image is not None:
                _blit(surface, image, self.position, self.scale, anchor, local, self.opacity)


class GameView:
    """The table: every card view, the undo label and touch dispatching."""

    def __init__(
        self,
        model: GameModel,
        registry: CardRegistry | None = None,
        resource_dir: str | os.PathLike[str] = ".",
    ) -> None:
        self.controller = GameController(model, registry)
        self.playfield_card_views = self._create_views(model.playfield, registry, resource_dir)
        self.stackfield_card_views = self._create_views(model.stackfield, registry, resource_dir)
        for view in self.card_views:
            view.set_click_callback(self._handle_card_click)

        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.Font(None, LABEL_FONT_SIZE)
        self._label_image = font.render(LABEL_TEXT, True, LABEL_COLOR)
        self.label_position: Point = LABEL_POSITION
        self.label_scale = 1.0

        self._touched_card: Optional[CardManager] = None
        self._label_touched = False

    @staticmethod
    def _create_views(
        cards: Sequence[CardModel],
        registry: CardRegistry | None,
        resource_dir: str | os.PathLike[str],
    ) -> list[CardView]:
        views = []
        for card in cards:
            try:
                views.append(CardView(card, (0.0, 0.0), registry, resource_dir))
            except FileNotFoundError as exc:
                logger.warning("card %s has no view: %s", card.id, exc)
        return views

    @property
    def card_views(self) -> list[CardView]:
        """All card views in the order they were added."""
        return self.playfield_card_views + self.stackfield_card_views

    def _front_to_back(self) -> list[CardView]:
        ordered = sorted(
            enumerate(self.card_views), key=lambda item: (item[1].z_order, item[0]), reverse=True
        )
        return [view for _, view in ordered]

    def _back_to_front(self) -> list[CardView]:
        return list(reversed(self._front_to_back()))

    def label_contains(self, point: Point) -> bool:
        """Whether a point lies on the undo label."""
        width, height = self._label_image.get_size()
        half_width = width * self.label_scale / 2
        half_height = height * self.label_scale / 2
        x, y = self.label_position
        return x - half_width <= point[0] <= x + half_width and y - half_height <= point[1] <= y + half_height

    def _handle_card_click(self, card_view: CardView) -> None:
        card_view.opacity = CLICKED_OPACITY
        card = card_view.card_manager.model
        if card.zone is CardZone.PLAYFIELD:
            self.controller.select_card_from_playfield_and_match(card)
        elif card.zone is CardZone.STACK:
            self.controller.click_stack_card(card)

    def handle_touch_began(self, point: Point) -> bool:
        """Offer a touch to the front-most card, then to the label; True if claimed."""
        self._touched_card = None
        self._label_touched = False
        for view in self._front_to_back():
            if view.card_manager.on_touch_began(point):
                self._touched_card = view.card_manager
                return True
        if self.label_contains(point):
            self.label_scale = LABEL_PRESSED_SCALE
            self._label_touched = True
            return True
        return False

    def handle_touch_ended(self, point: Point) -> None:
        """Finish the claimed touch: click the card, or undo if on the label."""
        card, label = self._touched_card, self._label_touched
        self._touched_card = None
        self._label_touched = False
        if card is not None:
            card.on_touch_ended(point)
        elif label:
            self.label_scale = 1.0
            if self.label_contains(point):
                logger.debug("undo label clicked")
                self.controller.handle_label_click()

    def handle_touch_cancelled(self, point: Point) -> None:
        """Abandon the claimed touch without a click."""
        card, label = self._touched_card, self._label_touched
        self._touched_card = None
        self._label_touched = False
        if card is not None:
            card.on_touch_cancelled(point)
        elif label:
            self.label_scale = 1.0

    def update(self, dt: float) -> None:
        """Advance every card's movement by dt seconds."""
        for view in self.card_views:
            view.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the cards back to front, then the label on top."""
        for view in self._back_to_front():
            view.draw(surface)
        _blit(
            surface,
            self._label_image,
            self.label_position,
            self.label_scale,
            _ANCHOR_MIDDLE,
            (0.0, 0.0),
            255,
        )