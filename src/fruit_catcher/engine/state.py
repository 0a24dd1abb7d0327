from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from ..config import CONFIG, GameConfig
from .items import Item

if TYPE_CHECKING:  # pragma: no cover
    from ..scores.table import HighScoreEntry


class Lane:
    LEFT = 0
    CENTER = 1
    RIGHT = 2


@dataclass
class GameState:
    """Mutable session state owned by the engine.

    Only the engine mutates this object. ``leaderboard`` is a snapshot taken
    when the summary screen is requested so that drawing never touches storage.
    """

    time_limit: int = CONFIG.time_limit
    score: int = 0
    level: int = 1
    remaining: int = CONFIG.time_limit
    basket_lane: int = Lane.CENTER
    active: bool = False
    frame_count: int = 0
    items: List[Item] = field(default_factory=list)
    show_summary: bool = False
    leaderboard: Tuple["HighScoreEntry", ...] = ()

    @classmethod
    def for_config(cls, config: GameConfig) -> "GameState":
        return cls(time_limit=config.time_limit, remaining=config.time_limit)

    def reset(self) -> None:
        """Return to a fresh, active session."""
        self.score = 0
        self.level = 1
        self.remaining = self.time_limit
        self.basket_lane = Lane.CENTER
        self.active = True
        self.frame_count = 0
        self.items = []
        self.show_summary = False
        self.leaderboard = ()


@dataclass(frozen=True)
class FrameView:
    """Read-only copy of everything a frame needs to be drawn."""

    score: int
    remaining: int
    basket_lane: int
    active: bool
    frame_count: int
    items: Tuple[Item, ...]
    show_summary: bool
    leaderboard: Tuple["HighScoreEntry", ...]

    @classmethod
    def capture(cls, state: GameState) -> "FrameView":
        return cls(
            score=state.score,
            remaining=state.remaining,
            basket_lane=state.basket_lane,
            active=state.active,
            frame_count=state.frame_count,
            items=tuple(Item(lane=i.lane, y=i.y, kind=i.kind) for i in state.items),
            show_summary=state.show_summary,
            leaderboard=tuple(state.leaderboard),
        )
