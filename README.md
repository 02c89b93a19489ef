# solitaire-match

A small card-matching solitaire game drawn with `pygame`.

Cards are laid out in two areas: the playfield and the stack. Clicking a
stack card moves it onto the hand pile, where it becomes the base card.
Clicking a playfield card moves it onto the hand pile only when a base card
exists and the two faces differ by exactly one (an ace matches a two, a
queen matches a jack or a king; there is no wrap-around). Every move can be
undone, most recent first, by clicking the undo label ("回退").

## Installation

```
pip install .
```

## Playing

```
solitaire-match [--resources DIR] [--level FILE] [--zoom FACTOR]
```

- `--resources` — directory holding the images and the level file
  (default `Resources`).
- `--level` — level file inside the resource directory
  (default `level_1.json`).
- `--zoom` — window zoom factor relative to the 1080 × 2080 design size
  (default `0.5`; must be positive).

The window shows two background bands, the cards, the undo label, a frame
rate counter and, if `CloseNormal.png` and `CloseSelected.png` are found in
the resource directory, a close button in the bottom-right corner. Clicking
it, or closing the window, ends the game. Animations pause while the window
is minimised.

Card images are looked up in the resource directory:

- `res/card_general.png` — card background (a card without it is not shown),
- `res/suits/club.png`, `diamond.png`, `heart.png`, `spade.png`,
- `res/number/small_<color>_<face>.png` and `res/number/big_<color>_<face>.png`,
  where `<color>` is `black` (clubs, spades) or `red`, and `<face>` is one of
  `A 2 3 4 5 6 7 8 9 10 J Q K`.

If the level file cannot be read or is not a JSON object, the game starts
with an empty table.

## Level files

A level is a JSON object with two arrays, `Playfield` and `Stack`. Each entry
describes one card:

```json
{
  "Playfield": [
    {"CardFace": 12, "CardSuit": 0, "Position": {"x": 250, "y": 1000}}
  ],
  "Stack": [
    {"CardFace": 2, "CardSuit": 0, "Position": {"x": 0, "y": 0}}
  ]
}
```

- `CardFace` is 0 (ace) through 12 (king).
- `CardSuit` is 0 clubs, 1 diamonds, 2 hearts, 3 spades.
- `Position` holds integer `x` and `y` coordinates, origin bottom-left.
  Playfield cards are shifted up by 600 and stack cards by (300, 400) when
  they are loaded.

Entries that are malformed or out of range are skipped with a logged
warning. Cards are numbered from 0 in the order they are read, playfield
first and then stack; skipped entries take no number.

## Using the pieces from Python

```python
from solitaire_match.level_loader import load_level_config
from solitaire_match.models import GameModel
from solitaire_match.controller import GameController, is_card_match

game = GameModel(load_level_config("level_1.json"))
controller = GameController(game)
controller.click_stack_card(game.stackfield[0])
print(is_card_match(game.playfield[0], controller.bottom_card()))
```

- `solitaire_match.models` — `CardModel`, `CardZone`, `CardFaceType`,
  `CardSuitType`, `UndoModel`, `LevelConfig`, `GameModel`.
- `solitaire_match.level_loader` — `parse_level_config(text)` and
  `load_level_config(path)`; both raise `LevelConfigError` for unreadable
  or invalid documents.
- `solitaire_match.undo_manager` — `UndoManager`.
- `solitaire_match.card_manager` — `CardManager` and `CardRegistry`.
- `solitaire_match.controller` — `GameController` and `is_card_match`.
- `solitaire_match.resources` — image paths for a suit and face, for
  example `small_number_resource(suit, face)`.
- `solitaire_match.views` — `CardView` and `GameView`.
- `solitaire_match.app` — `Scene`, `generate_game_model`,
  `generate_game_view` and `main`.

## What the game does not do

There is no sound, no dragging of cards, no detection of a won or lost game
and no score. Played cards are not removed from the game model; they only
change zone and position.

## Running the tests

```
pip install .[test]
pytest
```