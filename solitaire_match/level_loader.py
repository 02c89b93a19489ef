"""Loading of level layouts from JSON documents."""

from __future__ import annotations

import itertools
import json
import logging
import os
from typing import Any, Iterator

from .models import CardFaceType, CardModel, CardSuitType, CardZone, LevelConfig

logger = logging.getLogger(__name__)

_INT32 = range(-(2**31), 2**31)
_ZONE_OFFSETS = {
    CardZone.STACK: (300.0, 400.0),
    CardZone.PLAYFIELD: (0.0, 600.0),
}


class LevelConfigError(ValueError):
    """A level document could not be read or is not a JSON object."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in _INT32


def _parse_card(node: Any, zone: CardZone, ids: Iterator[int]) -> CardModel | None:
    if not isinstance(node, dict):
        return None
    face = node.get("CardFace")
    suit = node.get("CardSuit")
    position = node.get("Position")
    if not (_is_int(face) and _is_int(suit) and isinstance(position, dict)):
        return None
    x, y = position.get("x"), position.get("y")
    if not (_is_int(x) and _is_int(y)):
        return None
    if not (0 <= face <= 12 and 0 <= suit <= 3):
        return None
    dx, dy = _ZONE_OFFSETS[zone]
    return CardModel(
        face=CardFaceType(face),
        suit=CardSuitType(suit),
        position=(float(x) + dx, float(y) + dy),
        id=next(ids),
        zone=zone,
    )


def parse_level_config(text: str | bytes) -> LevelConfig:
    """Build a LevelConfig from a JSON document.

    Cards are numbered from 0 in document order, playfield first; invalid
    card entries are skipped with a warning and take no number.
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LevelConfigError(f"level document is not valid JSON: {exc}") from exc
    if not isinstance(root, dict):
        raise LevelConfigError("level document root is not an object")

    config = LevelConfig()
    ids = itertools.count()
    sections = (
        ("Playfield", CardZone.PLAYFIELD, config.playfield),
        ("Stack", CardZone.STACK, config.stack),
    )
    for key, zone, target in sections:
        nodes = root.get(key)
        if not isinstance(nodes, list):
            continue
        for index, node in enumerate(nodes):
            card = _parse_card(node, zone, ids)
            if card is None:
                logger.warning("Invalid %s card at index %d", key, index)
            else:
                target.append(card)
    return config


def load_level_config(file_name: str | os.PathLike[str]) -> LevelConfig:
    """Read and parse a level file."""
    try:
        with open(file_name, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise LevelConfigError(f"cannot read level file {file_name}: {exc}") from exc
    return parse_level_config(text)