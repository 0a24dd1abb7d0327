"""Frame composition.

Every function here is pure: it reads a :class:`FrameView` and returns draw
commands. Nothing in this module mutates game state.
"""

from __future__ import annotations

from typing import List, Optional

from ..config import CONFIG, PALETTE, GameConfig, Palette
from ..engine.state import FrameView
from .commands import DrawCommand, DrawImage, FillRect, Glyph, Line, Text

BASKET_GLYPH = "\U0001F9FA"
TITLE = "\U0001F3C6 HALL OF FAME \U0001F3C6"
RESTART_HINT = "Press Restart Button to Play Again"


def background(config: GameConfig, palette: Palette, image: Optional[str]) -> List[DrawCommand]:
    if image:
        return [DrawImage(image, 0, 0, config.canvas_width, config.canvas_height)]
    return [FillRect(0, 0, config.canvas_width, config.canvas_height, palette.sky)]


def lanes(config: GameConfig, palette: Palette) -> List[DrawCommand]:
    return [
        Line(i * config.lane_width, 0, i * config.lane_width, config.canvas_height, palette.lane_line, 1)
        for i in range(1, config.lanes)
    ]


def items(view: FrameView, config: GameConfig) -> List[DrawCommand]:
    return [Glyph(item.kind.glyph, item.x(config), item.y, config.item_glyph_size) for item in view.items]


def basket(view: FrameView, config: GameConfig) -> List[DrawCommand]:
    return [Glyph(BASKET_GLYPH, config.lane_center_x(view.basket_lane), config.basket_y, config.basket_glyph_size)]


def hud(view: FrameView, config: GameConfig, palette: Palette) -> List[DrawCommand]:
    time_color = palette.alert if view.remaining <= config.alert_time else palette.text
    return [
        FillRect(0, 0, config.canvas_width, config.hud_height, palette.hud_background),
        Text(f"Score: {view.score}", 10, 25, palette.text, font_size=24, align="left"),
        Text(f"Time: {view.remaining}", config.canvas_width - 10, 25, time_color, font_size=24, align="right"),
    ]


def summary(view: FrameView, config: GameConfig, palette: Palette) -> List[DrawCommand]:
    mid = config.canvas_width / 2
    out: List[DrawCommand] = [
        FillRect(0, 0, config.canvas_width, config.canvas_height, palette.overlay),
        Text(TITLE, mid, 80, palette.title, font_size=40, bold=True),
        Text(f"Your Score: {view.score}", mid, 140, palette.text, font_size=30),
    ]
    y = 200
    for rank, entry in enumerate(view.leaderboard, start=1):
        color = palette.top_rank if rank == 1 else palette.text
        out.append(Text(f"{rank}. {entry.score} pts ({entry.date})", mid, y, color, font_size=24))
        y += 40
    # Blink: visible for the first half of each period
    if view.frame_count % config.blink_period < config.blink_period // 2:
        out.append(Text(RESTART_HINT, mid, 500, palette.hint, font_size=20))
    return out


def compose(
    view: FrameView,
    config: GameConfig = CONFIG,
    palette: Palette = PALETTE,
    background_image: Optional[str] = None,
) -> List[DrawCommand]:
    """Draw commands for one frame: summary overlay, idle background, or live play."""
    out = background(config, palette, background_image)
    if view.show_summary and not view.active:
        out.extend(summary(view, config, palette))
        return out
    if not view.active:
        return out
    out.extend(lanes(config, palette))
    out.extend(items(view, config))
    out.extend(basket(view, config))
    out.extend(hud(view, config, palette))
    return out


__all__ = ["compose", "BASKET_GLYPH", "TITLE", "RESTART_HINT"]
