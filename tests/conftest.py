import random
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from fruit_catcher.engine.clock import FrameClock  # noqa: E402
from fruit_catcher.engine.core import GameEngine  # noqa: E402
from fruit_catcher.scores import HighScoreTable, MemoryStore  # noqa: E402


class CallRecorder:
    def __init__(self) -> None:
        self.calls = []

    def __call__(self, score: int, level: int) -> None:
        self.calls.append((score, level))


@pytest.fixture
def clock() -> FrameClock:
    return FrameClock()


@pytest.fixture
def table() -> HighScoreTable:
    return HighScoreTable(MemoryStore(), now=lambda: datetime(2024, 5, 1, 12, 30, 0))


@pytest.fixture
def score_events() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def end_events() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def engine(clock, table, score_events, end_events) -> GameEngine:
    return GameEngine(
        scheduler=clock,
        high_scores=table,
        rng=random.Random(1234),
        on_score_change=score_events,
        on_game_end=end_events,
    )
