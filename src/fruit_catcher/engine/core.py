from __future__ import annotations

import logging
import random
import threading
from typing import Callable, List, Optional, Tuple

from ..config import CONFIG, PALETTE, GameConfig, Palette
from ..input.lanes import parse_lane_signal
from ..render.commands import DrawCommand
from ..render.scene import compose
from ..scores.store import MemoryStore
from ..scores.table import HighScoreTable
from .clock import FrameClock, ScheduledTask, Scheduler
from .items import Item, collides, item_speed, spawn_interval, spawn_item
from .state import FrameView, GameState

logger = logging.getLogger(__name__)

ScoreCallback = Callable[[int, int], None]


class GameEngine:
    """Authoritative simulation of one catching session.

    Three call sites mutate state: ``update()`` once per frame, the 1 Hz
    countdown task, and ``receive_lane_input()`` whenever a classifier (or
    keyboard) produces a label. All of them, plus ``start``/``stop`` and the
    state snapshot taken by ``render_frame``, run under one re-entrant lock so
    input may arrive from another thread.

    Callbacks (``on_score_change``, ``on_game_end``) may be passed to the
    constructor or set later; the last registration wins and an unset
    callback is skipped.
    """

    def __init__(
        self,
        config: GameConfig = CONFIG,
        *,
        scheduler: Optional[Scheduler] = None,
        high_scores: Optional[HighScoreTable] = None,
        rng: Optional[random.Random] = None,
        on_score_change: Optional[ScoreCallback] = None,
        on_game_end: Optional[ScoreCallback] = None,
        palette: Palette = PALETTE,
        background_image: Optional[str] = None,
    ) -> None:
        self.config = config
        self.palette = palette
        self.background_image = background_image
        self.scheduler: Scheduler = scheduler or FrameClock()
        self.high_scores = high_scores or HighScoreTable(MemoryStore())
        self.rng = rng or random.Random()
        self.state = GameState.for_config(config)
        self.on_score_change = on_score_change
        self.on_game_end = on_game_end
        self._timer: Optional[ScheduledTask] = None
        self._lock = threading.RLock()

    # ---------- Callbacks ----------
    def set_score_change_callback(self, callback: Optional[ScoreCallback]) -> None:
        self.on_score_change = callback

    def set_game_end_callback(self, callback: Optional[ScoreCallback]) -> None:
        self.on_game_end = callback

    def _notify(self, callback: Optional[ScoreCallback], score: int, level: int) -> None:
        if callback is None:
            return
        try:
            callback(score, level)
        except Exception:
            logger.exception("Callback %r failed", callback)

    # ---------- Read-only accessors ----------
    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def remaining(self) -> int:
        return self.state.remaining

    @property
    def basket_lane(self) -> int:
        return self.state.basket_lane

    @property
    def items(self) -> List[Item]:
        return self.state.items

    @property
    def frame_count(self) -> int:
        return self.state.frame_count

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.cancelled

    # ---------- Lifecycle ----------
    def start(self) -> None:
        """Begin a fresh session. Always a full reset, whatever the prior state."""
        with self._lock:
            self._cancel_timer()
            self.state.reset()
            self._timer = self.scheduler.schedule_interval(self._tick_second, 1.0)
        logger.info("Game started (time_limit=%ds)", self.config.time_limit)

    def stop(self) -> None:
        """End the session: freeze state, persist the score, fire ``on_game_end``.

        A no-op when already inactive, so a timer expiry racing an external
        stop request only ends the game once.
        """
        with self._lock:
            if not self.state.active:
                return
            self.state.active = False
            self._cancel_timer()
            score, level = self.state.score, self.state.level
        logger.info("Game over (score=%d, level=%d)", score, level)
        self.high_scores.record_score(score)
        self._notify(self.on_game_end, score, level)

    def show_summary(self) -> bool:
        """Switch an inactive engine to the leaderboard screen.

        Returns False (and changes nothing) while a session is running.
        """
        leaderboard = tuple(self.high_scores.load())
        with self._lock:
            if self.state.active:
                return False
            self.state.leaderboard = leaderboard
            self.state.show_summary = True
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick_second(self) -> None:
        with self._lock:
            if not self.state.active:
                return
            self.state.remaining = max(0, self.state.remaining - 1)
            expired = self.state.remaining <= 0
        if expired:
            self.stop()

    # ---------- Simulation ----------
    def update(self) -> None:
        """Advance one frame: spawn, move, catch, and cull items."""
        caught: List[Tuple[Item, int, int]] = []
        with self._lock:
            state = self.state
            if not state.active:
                return
            state.frame_count += 1

            if state.frame_count % spawn_interval(state.remaining, self.config) == 0:
                state.items.append(spawn_item(self.rng, self.config))

            speed = item_speed(state.remaining, self.config)
            kept: List[Item] = []
            for item in state.items:
                item.y += speed
                if collides(item, state.basket_lane, self.config):
                    state.score += item.kind.score
                    caught.append((item, state.score, state.level))
                    continue
                if item.y > self.config.canvas_height:
                    continue
                kept.append(item)
            state.items = kept

        for item, score, level in caught:
            logger.debug("Caught %s in lane %d -> score %d", item.kind.key, item.lane, score)
            self._notify(self.on_score_change, score, level)

    def receive_lane_input(self, signal: object) -> None:
        """Move the basket according to a lane label; unknown labels are ignored."""
        lane = parse_lane_signal(signal)
        with self._lock:
            if not self.state.active or lane is None:
                return
            if lane != self.state.basket_lane:
                logger.debug("Basket lane %d -> %d (%r)", self.state.basket_lane, lane, signal)
            self.state.basket_lane = lane

    # ---------- Output ----------
    def snapshot(self) -> FrameView:
        with self._lock:
            return FrameView.capture(self.state)

    def render_frame(self) -> List[DrawCommand]:
        """Draw commands for the current state. Never mutates the game."""
        return compose(self.snapshot(), self.config, self.palette, self.background_image)


__all__ = ["GameEngine", "ScoreCallback"]
