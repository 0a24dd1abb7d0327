from __future__ import annotations

import logging
import os
import random
from pathlib import Path
from typing import Optional

from .config import CONFIG
from .engine.clock import ArcadeScheduler, FrameClock, Scheduler
from .engine.core import GameEngine
from .engine.loop import GameLoop, LoopConfig
from .input.lanes import QUIT, RESTART, LaneKeyMapper, ScriptedLaneSource
from .platform.paths import get_scores_path
from .scores.store import JsonFileStore
from .scores.table import HighScoreTable

logger = logging.getLogger(__name__)

# Delay between the game-over notice and the leaderboard screen
SUMMARY_DELAY = 1.5


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def build_engine(
    scheduler: Scheduler,
    data_dir: Optional[Path] = None,
    seed: Optional[int] = None,
    background: Optional[str] = None,
) -> GameEngine:
    """Wire an engine to durable score storage under the user data dir."""
    store = JsonFileStore(get_scores_path(data_dir))
    logger.info("High scores stored in %s", store.path)
    return GameEngine(
        CONFIG,
        scheduler=scheduler,
        high_scores=HighScoreTable(store),
        rng=random.Random(seed),
        background_image=background,
    )


def run_gui(
    data_dir: Optional[Path] = None,
    seed: Optional[int] = None,
    background: Optional[str] = None,
    tick_rate: float = 60.0,
    **_: object,
) -> int:
    """Run the game in an Arcade window if available, otherwise fall back to headless.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(data_dir=data_dir, seed=seed, **_)

    import arcade

    from .render.arcade_surface import ArcadeSurface

    mapper = LaneKeyMapper.default()
    key_names = mapper.key_codes(arcade.key)

    class GameWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(CONFIG.canvas_width, CONFIG.canvas_height, title="Fruit Catcher", update_rate=1 / (tick_rate or 60.0))
            self.engine = build_engine(ArcadeScheduler(), data_dir=data_dir, seed=seed, background=background)
            self.engine.set_game_end_callback(self._on_game_end)
            self.surface = ArcadeSurface(CONFIG.canvas_height)
            self.mapper = mapper
            self._notice: Optional[str] = None
            self.engine.start()

        def _on_game_end(self, score: int, level: int) -> None:
            self._notice = f"Game Over! Your Score: {score}"
            arcade.schedule_once(self._show_summary, SUMMARY_DELAY)

        def _show_summary(self, _delta_time: float) -> None:
            self._notice = None
            self.engine.show_summary()

        def on_draw(self):
            self.clear()
            self.surface.draw(self.engine.render_frame())
            if self._notice:
                arcade.draw_text(
                    self._notice,
                    self.width / 2,
                    self.height / 2,
                    color=arcade.color.WHITE,
                    font_size=32,
                    bold=True,
                    anchor_x="center",
                    anchor_y="center",
                )

        def on_update(self, delta_time: float):
            # One simulation step per frame; the countdown runs on arcade's clock
            self.engine.update()

        def on_key_press(self, symbol: int, modifiers: int):
            signal = self.mapper.translate(key_names.get(symbol))
            if signal == QUIT:
                self.engine.stop()
                self.close()
            elif signal == RESTART:
                if not self.engine.active:
                    arcade.unschedule(self._show_summary)
                    self._notice = None
                    self.engine.start()
            elif signal is not None:
                self.engine.receive_lane_input(signal)

    window = GameWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        window.engine.set_game_end_callback(None)
        window.engine.stop()


def run_headless(
    data_dir: Optional[Path] = None,
    seed: Optional[int] = None,
    lanes: Optional[str] = None,
    max_steps: Optional[int] = None,
    tick_rate: float = 0.0,
    **_: object,
) -> int:
    """Play one session without a window, steering with scripted lane signals.

    Args:
        lanes: Comma separated lane signals replayed once per second, e.g. "left,center,right".
        max_steps: Stop after N frames even if the round has time left.
        tick_rate: Wall-clock frames per second; 0 runs as fast as possible.
    """
    print("Fruit Catcher (headless)")
    print("Press Ctrl+C to exit. Running...\n")

    clock = FrameClock()
    engine = build_engine(clock, data_dir=data_dir, seed=seed)
    engine.set_game_end_callback(lambda score, level: print(f"Game Over! Your Score: {score}"))
    source = ScriptedLaneSource.from_csv(lanes) if lanes else None
    loop = GameLoop(engine, clock, LoopConfig(tick_rate=tick_rate, max_steps=max_steps), lanes=source)
    try:
        steps = loop.run()
    except KeyboardInterrupt:
        engine.stop()
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1

    print(f"Loop complete (steps={steps})")
    engine.show_summary()
    print("HALL OF FAME")
    for rank, entry in enumerate(engine.snapshot().leaderboard, start=1):
        print(f"{rank}. {entry.score} pts ({entry.date})")
    return 0


def run_auto(**kwargs) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - FRUIT_CATCHER_HEADLESS=1 forces headless.
      - FRUIT_CATCHER_GUI=1 forces GUI (if arcade importable).
    """
    if os.getenv("FRUIT_CATCHER_HEADLESS") == "1":
        return run_headless(**kwargs)

    if os.getenv("FRUIT_CATCHER_GUI") == "1":
        return run_gui(**kwargs)

    # Default preference: GUI if available
    return run_gui(**kwargs)
