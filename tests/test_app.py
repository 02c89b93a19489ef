import json

import pygame
import pytest

from solitaire_match.app import (
    DESIGN_SIZE,
    Scene,
    generate_game_model,
    generate_game_view,
)
from solitaire_match.card_manager import CardRegistry
from solitaire_match.controller import HAND_POSITION
from solitaire_match.models import CardFaceType, CardZone

LEVEL = {
    "Playfield": [
        {"CardFace": 4, "CardSuit": 0, "Position": {"x": 100, "y": 800}},
    ],
    "Stack": [
        {"CardFace": 3, "CardSuit": 2, "Position": {"x": 0, "y": 0}},
    ],
}

CLOSE_GREEN = (0, 255, 0)
CLOSE_BLUE = (0, 0, 255)


def _save(path, size, color):
    path.parent.mkdir(parents=True, exist_ok=True)
    image = pygame.Surface(size)
    image.fill(color)
    pygame.image.save(image, str(path))


@pytest.fixture
def resource_dir(tmp_path):
    _save(tmp_path / "res" / "card_general.png", (100, 150), (250, 250, 250))
    _save(tmp_path / "CloseNormal.png", (40, 40), CLOSE_GREEN)
    _save(tmp_path / "CloseSelected.png", (40, 40), CLOSE_BLUE)
    (tmp_path / "level_1.json").write_text(json.dumps(LEVEL), encoding="utf-8")
    return tmp_path


def _window(point):
    return (point[0], DESIGN_SIZE[1] - point[1])


def _click(scene, point):
    pos = _window(point)
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1))
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1))


def test_generate_game_model_reads_level(resource_dir):
    model = generate_game_model(resource_dir / "level_1.json")
    assert [card.zone for card in model.playfield] == [CardZone.PLAYFIELD]
    assert [card.zone for card in model.stackfield] == [CardZone.STACK]
    assert model.stackfield[0].face is CardFaceType.FOUR


def test_generate_game_model_missing_file_gives_empty_model(tmp_path):
    model = generate_game_model(tmp_path / "absent.json")
    assert model.playfield == []
    assert model.stackfield == []
    assert len(model.undo_model) == 0


def test_generate_game_view_builds_card_views(resource_dir):
    model = generate_game_model(resource_dir / "level_1.json")
    registry = CardRegistry()
    view = generate_game_view(model, registry, resource_dir)
    assert len(view.card_views) == len(model.playfield) + len(model.stackfield)
    assert registry.get(model.stackfield[0].id).model is model.stackfield[0]


def test_draw_background_bands(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    surface = pygame.Surface(DESIGN_SIZE)
    scene.draw(surface)
    assert tuple(surface.get_at((5, 5)))[:3] == (165, 42, 42)
    assert tuple(surface.get_at((5, DESIGN_SIZE[1] - 5)))[:3] == (128, 0, 128)


def test_close_button_drawn_and_pressed(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    surface = pygame.Surface(DESIGN_SIZE)
    corner = (DESIGN_SIZE[0] - 5, DESIGN_SIZE[1] - 5)
    scene.draw(surface)
    assert tuple(surface.get_at(corner))[:3] == CLOSE_GREEN
    scene.handle_event(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=_window((DESIGN_SIZE[0] - 20, 20)), button=1)
    )
    scene.draw(surface)
    assert tuple(surface.get_at(corner))[:3] == CLOSE_BLUE


def test_close_button_click_stops_scene(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    assert scene.running
    _click(scene, (DESIGN_SIZE[0] - 20, 20))
    assert scene.running is False


def test_missing_close_images_leave_scene_running(resource_dir):
    (resource_dir / "CloseNormal.png").unlink()
    scene = Scene(resource_dir, "level_1.json")
    _click(scene, (DESIGN_SIZE[0] - 20, 20))
    assert scene.running is True


def test_quit_event_stops_scene(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    scene.handle_event(pygame.event.Event(pygame.QUIT))
    assert scene.running is False


def test_stack_click_then_undo_label_round_trip(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    card = scene.game_model.stackfield[0]
    start = card.position
    _click(scene, start)
    assert card.zone is CardZone.HAND
    assert card.position == HAND_POSITION
    _click(scene, scene.game_view.label_position)
    assert card.zone is CardZone.STACK
    assert card.position == start


def test_frame_zoom_scales_mouse_positions(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    scene.frame_zoom = 0.5
    card = scene.game_model.stackfield[0]
    x, y = _window(card.position)
    pos = (x * 0.5, y * 0.5)
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1))
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1))
    assert card.zone is CardZone.HAND


def test_minimised_window_pauses_animation(resource_dir):
    scene = Scene(resource_dir, "level_1.json")
    card = scene.game_model.stackfield[0]
    start = card.position
    _click(scene, start)
    view = scene.registry.get(card.id).view
    scene.handle_event(pygame.event.Event(pygame.WINDOWMINIMIZED))
    scene.update(1.0)
    assert view.position == start
    scene.handle_event(pygame.event.Event(pygame.WINDOWRESTORED))
    scene.update(1.0)
    assert view.position == HAND_POSITION