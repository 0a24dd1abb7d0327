from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from ..config import CONFIG, GameConfig

logger = logging.getLogger(__name__)


class ItemKind(Enum):
    """Falling item kinds with their key, score delta and glyph."""

    APPLE = ("apple", 10, "\U0001F34E")
    ORANGE = ("orange", 20, "\U0001F34A")
    BANANA = ("banana", 30, "\U0001F34C")
    BOMB = ("bomb", -50, "\U0001F4A3")

    def __init__(self, key: str, score: int, glyph: str) -> None:
        self.key = key
        self.score = score
        self.glyph = glyph


# Cumulative thresholds checked in order against a uniform draw in [0, 1).
# Bomb 35%, Banana 25%, Orange 20%, Apple takes the remaining 20%.
SPAWN_TABLE: Sequence[Tuple[float, ItemKind]] = (
    (0.35, ItemKind.BOMB),
    (0.60, ItemKind.BANANA),
    (0.80, ItemKind.ORANGE),
)


@dataclass
class Item:
    lane: int
    y: float
    kind: ItemKind

    def x(self, config: GameConfig = CONFIG) -> float:
        return config.lane_center_x(self.lane)


def choose_kind(rng: random.Random) -> ItemKind:
    roll = rng.random()
    for threshold, kind in SPAWN_TABLE:
        if roll < threshold:
            return kind
    return ItemKind.APPLE


def spawn_item(rng: random.Random, config: GameConfig = CONFIG) -> Item:
    """Create a new item in a uniformly random lane, just above the playfield."""
    lane = rng.randrange(config.lanes)
    item = Item(lane=lane, y=config.spawn_y, kind=choose_kind(rng))
    logger.debug("Spawned %s in lane %d", item.kind.key, lane)
    return item


def elapsed_seconds(remaining: int, config: GameConfig = CONFIG) -> int:
    return config.time_limit - remaining


def spawn_interval(remaining: int, config: GameConfig = CONFIG) -> int:
    """Frames between spawns; shrinks by one frame per elapsed second, floored."""
    return max(config.min_spawn_rate, config.base_spawn_rate - elapsed_seconds(remaining, config))


def item_speed(remaining: int, config: GameConfig = CONFIG) -> float:
    """Per-frame fall distance; grows linearly with elapsed time, capped at max_speed."""
    speed = config.base_speed + elapsed_seconds(remaining, config) * config.speed_ramp
    return min(config.max_speed, speed)


def collides(item: Item, basket_lane: int, config: GameConfig = CONFIG) -> bool:
    """True when the item is in the basket's lane and within the catch band (inclusive)."""
    if item.lane != basket_lane:
        return False
    return config.basket_y - config.catch_band <= item.y <= config.basket_y + config.catch_band


__all__ = [
    "ItemKind",
    "Item",
    "SPAWN_TABLE",
    "choose_kind",
    "spawn_item",
    "spawn_interval",
    "item_speed",
    "collides",
]
