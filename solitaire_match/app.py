"""Game start-up: building the model and view from a level, the scene and the main loop."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence, Tuple

import pygame

from .card_manager import CardRegistry, Point
from .level_loader import LevelConfigError, load_level_config
from .models import GameModel
from .views import GameView

logger = logging.getLogger(__name__)

WINDOW_TITLE = "card_game"
DESIGN_SIZE: Tuple[int, int] = (1080, 2080)
DEFAULT_LEVEL = "level_1.json"
DEFAULT_FRAME_ZOOM = 0.5
FPS = 60

TOP_COLOR = (165, 42, 42)
BOTTOM_COLOR = (128, 0, 128)
TOP_FRACTION = 2.0 / 3.0

CLOSE_NORMAL = "CloseNormal.png"
CLOSE_SELECTED = "CloseSelected.png"


def generate_game_model(level_file: str | os.PathLike[str]) -> GameModel:
    """Build a game model from a level file; an unreadable level gives an empty model."""
    try:
        config = load_level_config(level_file)
    except LevelConfigError as exc:
        logger.error("%s", exc)
        return GameModel(None)
    return GameModel(config)


def generate_game_view(
    game_model: GameModel,
    registry: CardRegistry | None = None,
    resource_dir: str | os.PathLike[str] = ".",
) -> GameView:
    """Build the table view, with its controller, for a game model."""
    return GameView(game_model, registry, resource_dir)


def _load_optional(path: str) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(path)
    except (pygame.error, OSError):
        return None


class _CloseButton:
    """The quit button in the bottom-right corner."""

    def __init__(self, normal: pygame.Surface, selected: pygame.Surface, visible_width: float) -> None:
        self.normal = normal
        self.selected = selected
        width, height = normal.get_size()
        self.size = (width, height)
        self.position: Point = (visible_width - width / 2, height / 2)
        self.pressed = False

    def contains(self, point: Point) -> bool:
        x, y = self.position
        half_width, half_height = self.size[0] / 2, self.size[1] / 2
        return x - half_width <= point[0] <= x + half_width and y - half_height <= point[1] <= y + half_height

    def draw(self, surface: pygame.Surface) -> None:
        image = self.selected if self.pressed else self.normal
        width, height = image.get_size()
        left = self.position[0] - width / 2
        top = surface.get_height() - (self.position[1] + height / 2)
        surface.blit(image, (round(left), round(top)))


class Scene:
    """The main scene: two background bands, the card table and a close button."""

    def __init__(
        self,
        resource_dir: str | os.PathLike[str] = ".",
        level_file: str | os.PathLike[str] = DEFAULT_LEVEL,
    ) -> None:
        directory = os.fspath(resource_dir)
        self.visible_size: Tuple[int, int] = DESIGN_SIZE
        self.frame_zoom = 1.0
        self.running = True
        self.paused = False
        self.registry = CardRegistry()

        normal = _load_optional(os.path.join(directory, CLOSE_NORMAL))
        selected = _load_optional(os.path.join(directory, CLOSE_SELECTED))
        self.close_button: Optional[_CloseButton] = None
        if normal is None or selected is None or 0 in normal.get_size():
            logger.error(
                "Error while loading: '%s' and '%s' from %s", CLOSE_NORMAL, CLOSE_SELECTED, directory
            )
        else:
            self.close_button = _CloseButton(normal, selected, self.visible_size[0])

        level_path = os.path.join(directory, os.fspath(level_file))
        self.game_model = generate_game_model(level_path)
        self.game_view = generate_game_view(self.game_model, self.registry, directory)
        self._touch_owner: Optional[str] = None

    def _to_game(self, pos: Sequence[float]) -> Point:
        x = pos[0] / self.frame_zoom
        y = pos[1] / self.frame_zoom
        return (x, self.visible_size[1] - y)

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to a pygame event: quitting, window state changes and mouse touches."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == getattr(pygame, "WINDOWMINIMIZED", None):
            self.paused = True
        elif event.type == getattr(pygame, "WINDOWRESTORED", None):
            self.paused = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._touch_began(self._to_game(event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._touch_ended(self._to_game(event.pos))

    def _touch_began(self, point: Point) -> None:
        self._touch_owner = None
        if self.game_view.handle_touch_began(point):
            self._touch_owner = "game"
        elif self.close_button is not None and self.close_button.contains(point):
            self.close_button.pressed = True
            self._touch_owner = "close"

    def _touch_ended(self, point: Point) -> None:
        owner, self._touch_owner = self._touch_owner, None
        if owner == "game":
            self.game_view.handle_touch_ended(point)
        elif owner == "close" and self.close_button is not None:
            self.close_button.pressed = False
            if self.close_button.contains(point):
                self.running = False

    def update(self, dt: float) -> None:
        """Advance animations by dt seconds unless the window is minimised."""
        if not self.paused:
            self.game_view.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the background bands, the table and the close button."""
        width, height = self.visible_size
        top_height = round(height * TOP_FRACTION)
        surface.fill(TOP_COLOR, pygame.Rect(0, 0, width, top_height))
        surface.fill(BOTTOM_COLOR, pygame.Rect(0, top_height, width, height - top_height))
        self.game_view.draw(surface)
        if self.close_button is not None:
            self.close_button.draw(surface)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="solitaire-match", description="Card matching game.")
    parser.add_argument("--resources", default="Resources", help="directory holding images and levels")
    parser.add_argument("--level", default=DEFAULT_LEVEL, help="level file inside the resource directory")
    parser.add_argument("--zoom", type=float, default=DEFAULT_FRAME_ZOOM, help="window zoom factor")
    args = parser.parse_args(argv)
    if args.zoom <= 0:
        parser.error("--zoom must be positive")

    pygame.init()
    try:
        window_size = (round(DESIGN_SIZE[0] * args.zoom), round(DESIGN_SIZE[1] * args.zoom))
        window = pygame.display.set_mode(window_size)
        pygame.display.set_caption(WINDOW_TITLE)
        scene = Scene(args.resources, args.level)
        scene.frame_zoom = args.zoom
        canvas = pygame.Surface(DESIGN_SIZE)
        stats_font = pygame.font.Font(None, 48)
        clock = pygame.time.Clock()
        while scene.running:
            dt = clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                scene.handle_event(event)
            scene.update(dt)
            scene.draw(canvas)
            stats = stats_font.render(f"{clock.get_fps():.1f}", True, (255, 255, 255))
            canvas.blit(stats, (10, DESIGN_SIZE[1] - stats.get_height() - 10))
            pygame.transform.scale(canvas, window_size, window)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0