from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..input.lanes import ScriptedLaneSource
from ..render.commands import Surface
from .clock import FrameClock
from .core import GameEngine

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Configuration for the headless frame driver.

    Attributes:
        tick_rate: Target frames per second in wall time. If 0 or None, runs as fast as possible.
        max_steps: If provided and > 0, the loop stops after this many frames even mid-game.
        frame_dt: Simulated seconds per frame fed to the countdown clock, independent of tick_rate.
    """

    tick_rate: Optional[float] = 60.0
    max_steps: Optional[int] = None
    frame_dt: float = 1.0 / 60.0


class GameLoop:
    """Drives a :class:`GameEngine` the way a render loop would, without a window.

    Each frame: deliver any due lane signal, ``update()`` the engine, advance
    the simulated clock by ``frame_dt`` and optionally hand the frame's draw
    commands to a surface. Simulated time keeps runs deterministic regardless
    of how fast the host machine is.
    """

    def __init__(
        self,
        engine: GameEngine,
        clock: FrameClock,
        config: Optional[LoopConfig] = None,
        lanes: Optional[ScriptedLaneSource] = None,
        surface: Optional[Surface] = None,
    ) -> None:
        self.engine = engine
        self.clock = clock
        self.config = config or LoopConfig()
        self.lanes = lanes
        self.surface = surface
        self._step: int = 0

    @property
    def step(self) -> int:
        return self._step

    def frame(self) -> None:
        """Run a single frame."""
        if self.lanes is not None:
            signal = self.lanes.poll()
            if signal is not None:
                self.engine.receive_lane_input(signal)
        self.engine.update()
        self.clock.advance(self.config.frame_dt)
        if self.surface is not None:
            self.surface.draw(self.engine.render_frame())
        self._step += 1

    def run(self) -> int:
        """Start a session and run frames until it ends or max_steps is reached.

        Returns the number of frames run.
        """
        self._step = 0
        self.engine.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self.engine.active:
            if self.config.max_steps and self.config.max_steps > 0 and self._step >= self.config.max_steps:
                logger.info("max_steps=%d reached; stopping", self.config.max_steps)
                self.engine.stop()
                break
            started = time.perf_counter()
            self.frame()

            # Throttle to tick rate if configured
            if target_dt > 0:
                remaining = target_dt - (time.perf_counter() - started)
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
        return self._step


__all__ = ["LoopConfig", "GameLoop"]
