from .commands import DrawCommand, DrawImage, FillRect, Glyph, Line, RecordingSurface, Surface, Text
from .scene import compose

__all__ = [
    "DrawCommand",
    "DrawImage",
    "FillRect",
    "Glyph",
    "Line",
    "Text",
    "Surface",
    "RecordingSurface",
    "compose",
]
