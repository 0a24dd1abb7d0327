from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import arcade

from ..config import PALETTE, Palette
from .commands import DrawCommand, DrawImage, FillRect, Glyph, Line, Text

logger = logging.getLogger(__name__)

_ANCHOR_Y = {"middle": "center", "alphabetic": "baseline"}


class ArcadeSurface:
    """Executes draw commands with Arcade.

    Commands use canvas coordinates (top-left origin); Arcade's origin is the
    bottom-left corner, so every y is flipped against the window height.
    """

    def __init__(self, height: int, palette: Palette = PALETTE) -> None:
        self.height = height
        self.palette = palette
        self._textures: Dict[str, Optional[object]] = {}

    def _y(self, y: float) -> float:
        return self.height - y

    def _texture(self, path: str):
        if path not in self._textures:
            try:
                self._textures[path] = arcade.load_texture(path)
            except (OSError, ValueError) as exc:
                logger.warning("Could not load background %s (%s); using plain fill", path, exc)
                self._textures[path] = None
        return self._textures[path]

    def draw(self, commands: Sequence[DrawCommand]) -> None:
        for cmd in commands:
            if isinstance(cmd, FillRect):
                self._fill(cmd)
            elif isinstance(cmd, DrawImage):
                texture = self._texture(cmd.path)
                if texture is None:
                    self._fill(FillRect(cmd.x, cmd.y, cmd.width, cmd.height, self.palette.sky))
                else:
                    arcade.draw_texture_rect(
                        texture, arcade.LBWH(cmd.x, self._y(cmd.y + cmd.height), cmd.width, cmd.height)
                    )
            elif isinstance(cmd, Line):
                arcade.draw_line(cmd.x1, self._y(cmd.y1), cmd.x2, self._y(cmd.y2), cmd.color, cmd.width)
            elif isinstance(cmd, Glyph):
                arcade.draw_text(
                    cmd.glyph,
                    cmd.x,
                    self._y(cmd.y),
                    color=(255, 255, 255, 255),
                    font_size=cmd.size,
                    anchor_x="center",
                    anchor_y="center",
                )
            elif isinstance(cmd, Text):
                arcade.draw_text(
                    cmd.text,
                    cmd.x,
                    self._y(cmd.y),
                    color=cmd.color,
                    font_size=cmd.font_size,
                    bold=cmd.bold,
                    anchor_x=cmd.align,
                    anchor_y=_ANCHOR_Y.get(cmd.baseline, "baseline"),
                )
            else:  # pragma: no cover - exhaustive over DrawCommand
                logger.debug("Unknown draw command %r", cmd)

    def _fill(self, cmd: FillRect) -> None:
        arcade.draw_lrbt_rectangle_filled(
            cmd.x, cmd.x + cmd.width, self._y(cmd.y + cmd.height), self._y(cmd.y), cmd.color
        )


__all__ = ["ArcadeSurface"]
