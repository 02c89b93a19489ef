import pytest

from solitaire_match.card_manager import CardManager, CardRegistry
from solitaire_match.controller import GameController, is_card_match
from solitaire_match.models import (
    CardFaceType,
    CardModel,
    CardSuitType,
    CardZone,
    GameModel,
    LevelConfig,
)


class FakeView:
    def __init__(self):
        self.scale = 1.0
        self.z_order = 0
        self.moves = []

    def is_touch_inside(self, point):
        return True

    def move_to(self, position, duration):
        self.moves.append((position, duration))


def card(face, card_id, zone, position):
    return CardModel(face, CardSuitType.CLUBS, position, card_id, zone)


@pytest.fixture
def setup():
    config = LevelConfig(
        playfield=[
            card(CardFaceType.SIX, 0, CardZone.PLAYFIELD, (100.0, 700.0)),
            card(CardFaceType.NINE, 1, CardZone.PLAYFIELD, (200.0, 700.0)),
        ],
        stack=[card(CardFaceType.FIVE, 2, CardZone.STACK, (300.0, 400.0))],
    )
    model = GameModel(config)
    registry = CardRegistry()
    views = {}
    for c in model.playfield + model.stackfield:
        manager = CardManager(c, registry)
        view = FakeView()
        manager.set_card(c, view)
        views[c.id] = view
    controller = GameController(model, registry)
    return model, controller, views


def test_is_card_match_adjacent_ranks():
    five = CardModel(CardFaceType.FIVE)
    six = CardModel(CardFaceType.SIX)
    assert is_card_match(five, six) is True
    assert is_card_match(six, five) is True


def test_is_card_match_rejects_equal_and_wrap():
    assert is_card_match(CardModel(CardFaceType.FIVE), CardModel(CardFaceType.FIVE)) is False
    assert is_card_match(CardModel(CardFaceType.ACE), CardModel(CardFaceType.KING)) is False


def test_select_without_history_fails(setup):
    model, controller, views = setup
    target = model.playfield[0]
    assert controller.select_card_from_playfield_and_match(target) is False
    assert target.zone is CardZone.PLAYFIELD
    assert views[0].moves == []


def test_bottom_card_default_when_empty(setup):
    _, controller, _ = setup
    bottom = controller.bottom_card()
    assert bottom.face is CardFaceType.ACE
    assert bottom.suit is CardSuitType.SPADES
    assert bottom.position == (0.0, 0.0)
    assert bottom.id is None


def test_click_stack_card_moves_to_hand(setup):
    model, controller, views = setup
    stack_card = model.stackfield[0]
    controller.click_stack_card(stack_card)
    assert stack_card.zone is CardZone.HAND
    assert stack_card.position == (700.0, 400.0)
    assert views[2].moves == [((700.0, 400.0), 0.5)]
    assert views[2].z_order == 1


def test_bottom_card_keeps_history(setup):
    model, controller, _ = setup
    controller.click_stack_card(model.stackfield[0])
    assert controller.bottom_card() is model.stackfield[0]
    assert controller.bottom_card() is model.stackfield[0]
    assert controller.undo() is True
    assert controller.undo() is False


def test_select_matching_playfield_card(setup):
    model, controller, views = setup
    controller.click_stack_card(model.stackfield[0])
    six = model.playfield[0]
    assert controller.select_card_from_playfield_and_match(six) is True
    assert six.zone is CardZone.HAND
    assert six.position == (700.0, 400.0)
    assert controller.bottom_card() is six
    assert views[0].moves == [((700.0, 400.0), 0.5)]


def test_select_non_matching_playfield_card(setup):
    model, controller, views = setup
    controller.click_stack_card(model.stackfield[0])
    nine = model.playfield[1]
    assert controller.select_card_from_playfield_and_match(nine) is False
    assert nine.zone is CardZone.PLAYFIELD
    assert nine.position == (200.0, 700.0)
    assert views[1].moves == []
    assert controller.bottom_card() is model.stackfield[0]


def test_undo_restores_position_and_zone(setup):
    model, controller, views = setup
    controller.click_stack_card(model.stackfield[0])
    six = model.playfield[0]
    controller.select_card_from_playfield_and_match(six)
    assert controller.undo() is True
    assert six.zone is CardZone.PLAYFIELD
    assert six.position == (100.0, 700.0)
    assert views[0].moves[-1] == ((100.0, 700.0), 0.5)
    assert views[0].z_order == 0
    assert controller.bottom_card() is model.stackfield[0]


def test_undo_with_empty_history(setup):
    _, controller, _ = setup
    assert controller.undo() is False


def test_handle_label_click_undoes(setup):
    model, controller, _ = setup
    stack_card = model.stackfield[0]
    controller.click_stack_card(stack_card)
    controller.handle_label_click()
    assert stack_card.zone is CardZone.STACK
    assert stack_card.position == (300.0, 400.0)
    assert controller.undo() is False


def test_handle_card_clicked_ignores_hand_cards(setup):
    model, controller, views = setup
    hand_card = model.playfield[1]
    hand_card.zone = CardZone.HAND
    controller.handle_card_clicked(hand_card)
    assert hand_card.position == (200.0, 700.0)
    assert views[1].moves == []


def test_cards_without_manager_still_move_in_model():
    config = LevelConfig(stack=[card(CardFaceType.TWO, 7, CardZone.STACK, (1.0, 2.0))])
    model = GameModel(config)
    controller = GameController(model, CardRegistry())
    target = model.stackfield[0]
    controller.click_stack_card(target)
    assert target.zone is CardZone.HAND
    assert target.position == (700.0, 400.0)
    assert controller.undo() is True
    assert target.zone is CardZone.HAND


def test_controller_does_not_share_game_model_history(setup):
    model, controller, _ = setup
    controller.click_stack_card(model.stackfield[0])
    assert len(model.undo_model) == 0
    assert controller.undo() is True