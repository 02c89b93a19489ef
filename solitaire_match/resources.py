"""Image resource paths for card backgrounds, suit icons and rank numbers.

Invalid suits or faces yield an empty path, which callers treat as
"no image".
"""

from __future__ import annotations

from .models import CardFaceType, CardSuitType

_FACE_NAMES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

_SUIT_RESOURCES = {
    CardSuitType.CLUBS: "res/suits/club.png",
    CardSuitType.DIAMONDS: "res/suits/diamond.png",
    CardSuitType.HEARTS: "res/suits/heart.png",
    CardSuitType.SPADES: "res/suits/spade.png",
}


def background() -> str:
    """Path of the card background image."""
    return "res/card_general.png"


def suit_resource(suit: CardSuitType) -> str:
    """Path of the suit icon, or an empty string for an invalid suit."""
    return _SUIT_RESOURCES.get(suit, "")


def face_to_string(face: CardFaceType) -> str:
    """Rank label such as "A", "10" or "K", or an empty string if out of range."""
    index = int(face)
    if 0 <= index < len(_FACE_NAMES):
        return _FACE_NAMES[index]
    return ""


def suit_to_color(suit: CardSuitType) -> str:
    """"black" for clubs and spades, "red" for everything else."""
    if suit in (CardSuitType.CLUBS, CardSuitType.SPADES):
        return "black"
    return "red"


def _number_resource(size: str, suit: CardSuitType, face: CardFaceType) -> str:
    color = suit_to_color(suit)
    face_name = face_to_string(face)
    if not color or not face_name:
        return ""
    return f"res/number/{size}_{color}_{face_name}.png"


def small_number_resource(suit: CardSuitType, face: CardFaceType) -> str:
    """Path of the small corner number image."""
    return _number_resource("small", suit, face)


def big_number_resource(suit: CardSuitType, face: CardFaceType) -> str:
    """Path of the large centre number image."""
    return _number_resource("big", suit, face)