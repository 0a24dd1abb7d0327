from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ..engine.state import Lane

logger = logging.getLogger(__name__)

# Checked in order; the first keyword contained in the signal wins.
LANE_KEYWORDS = (
    ("left", Lane.LEFT),
    ("right", Lane.RIGHT),
    ("center", Lane.CENTER),
)

RESTART = "restart"
QUIT = "quit"


def parse_lane_signal(signal: object) -> Optional[int]:
    """Map a classifier label to a lane by case-insensitive substring match.

    Returns None for anything unrecognised (including non-strings).
    """
    if not isinstance(signal, str):
        return None
    text = signal.strip().lower()
    if not text:
        return None
    for keyword, lane in LANE_KEYWORDS:
        if keyword in text:
            return lane
    return None


class LaneKeyMapper:
    """Rebindable mapping from keyboard key names to lane signals or commands.

    Keys are plain strings normalised to upper case, so any backend only has
    to translate its key constants to names (``"LEFT"``, ``"A"``...). The
    resulting lane signals go through the same path as classifier labels.
    """

    def __init__(self, bindings: Optional[Dict[str, str]] = None) -> None:
        self._bindings: Dict[str, str] = {}
        if bindings:
            for key, signal in bindings.items():
                self.bind(key, signal)

    @staticmethod
    def _normalize(key: object) -> Optional[str]:
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    def bind(self, key: str, signal: str) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = signal

    def bind_many(self, keys: Iterable[str], signal: str) -> None:
        for k in keys:
            self.bind(k, signal)

    def unbind(self, key: str) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def translate(self, key: object) -> Optional[str]:
        nk = self._normalize(key)
        if nk is None:
            return None
        return self._bindings.get(nk)

    def key_codes(self, namespace: object) -> Dict[int, str]:
        """Map a backend's key codes to the bound key names.

        ``namespace`` is a module of key constants such as ``arcade.key``. Only
        bound names are looked up; when two bound names share a code the first
        binding keeps it. Names the backend lacks are skipped.
        """
        codes: Dict[int, str] = {}
        for name in self._bindings:
            code = getattr(namespace, name, None)
            if isinstance(code, int):
                codes.setdefault(code, name)
        return codes

    @classmethod
    def default(cls) -> "LaneKeyMapper":
        """Arrows/WASD steer, R/Enter restart, Escape quits."""
        mapper = cls()
        mapper.bind_many(["LEFT", "A"], "left")
        mapper.bind_many(["RIGHT", "D"], "right")
        mapper.bind_many(["UP", "DOWN", "W", "S"], "center")
        mapper.bind_many(["R", "ENTER", "RETURN"], RESTART)
        mapper.bind_many(["ESCAPE", "ESC"], QUIT)
        return mapper


class ScriptedLaneSource:
    """Replays a fixed list of lane signals, one every ``every`` frames, cycling.

    Used by the headless runner in place of a pose classifier.
    """

    def __init__(self, signals: Iterable[str], every: int = 60) -> None:
        self.signals: List[str] = [s for s in signals if s]
        self.every = max(1, int(every))
        self._frame = 0
        self._cursor = self._cycle()

    def _cycle(self) -> Iterator[str]:
        while self.signals:
            yield from self.signals

    def poll(self) -> Optional[str]:
        """Signal due on this frame, or None."""
        if not self.signals:
            return None
        due = self._frame % self.every == 0
        self._frame += 1
        return next(self._cursor) if due else None

    @classmethod
    def from_csv(cls, text: str, every: int = 60) -> "ScriptedLaneSource":
        return cls((part.strip() for part in text.split(",")), every=every)


__all__ = ["parse_lane_signal", "LaneKeyMapper", "ScriptedLaneSource", "RESTART", "QUIT"]
