from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence, Type, TypeVar, Union

from ..config import Color

# Canvas coordinates: origin top-left, y grows downwards.


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: Color


@dataclass(frozen=True)
class DrawImage:
    path: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Glyph:
    """A single emoji/character centred on (x, y)."""

    glyph: str
    x: float
    y: float
    size: int


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    color: Color
    font_size: int = 24
    bold: bool = False
    align: str = "center"  # left | center | right
    baseline: str = "middle"  # middle | alphabetic


DrawCommand = Union[FillRect, DrawImage, Line, Glyph, Text]

C = TypeVar("C")


class Surface(Protocol):
    """Executes draw commands. Implemented by Arcade in the GUI and by recorders in tests."""

    def draw(self, commands: Sequence[DrawCommand]) -> None:  # pragma: no cover - interface
        ...


class RecordingSurface:
    """Surface that only remembers what it was asked to draw."""

    def __init__(self) -> None:
        self.frames: List[List[DrawCommand]] = []

    def draw(self, commands: Sequence[DrawCommand]) -> None:
        self.frames.append(list(commands))

    @property
    def last(self) -> List[DrawCommand]:
        return self.frames[-1] if self.frames else []

    def of_type(self, kind: Type[C]) -> List[C]:
        return [c for c in self.last if isinstance(c, kind)]

    def texts(self) -> List[str]:
        return [c.text for c in self.of_type(Text)]


__all__ = [
    "FillRect",
    "DrawImage",
    "Line",
    "Glyph",
    "Text",
    "DrawCommand",
    "Surface",
    "RecordingSurface",
]
