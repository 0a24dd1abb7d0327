from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import CorruptScoresError, StorageError
from .store import KeyValueStore

logger = logging.getLogger(__name__)

SCORES_KEY = "fruitCatcherHighScores"
MAX_ENTRIES = 5
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class HighScoreEntry:
    score: int
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "date": self.date}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "HighScoreEntry":
        return HighScoreEntry(score=int(data["score"]), date=str(data.get("date", "")))


def decode_entries(text: str) -> List[HighScoreEntry]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptScoresError(f"Invalid JSON: {e}") from e
    if not isinstance(raw, list):
        raise CorruptScoresError("Leaderboard payload must be a list")
    try:
        return [HighScoreEntry.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CorruptScoresError(f"Malformed leaderboard entry: {e}") from e


def encode_entries(entries: List[HighScoreEntry]) -> str:
    return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)


class HighScoreTable:
    """Bounded leaderboard kept under a single key of a key-value store.

    Reads never raise: absent, unreadable or corrupt data is an empty board.
    There is no protection against concurrent writers from other processes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = SCORES_KEY,
        max_entries: int = MAX_ENTRIES,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.key = key
        self.max_entries = max_entries
        self._now = now or datetime.now

    def load(self) -> List[HighScoreEntry]:
        try:
            text = self.store.get(self.key)
        except (StorageError, OSError) as e:
            logger.warning("Could not read high scores: %s", e)
            return []
        if not text:
            return []
        try:
            return decode_entries(text)
        except CorruptScoresError as e:
            logger.warning("Ignoring corrupt high scores: %s", e)
            return []

    def record_score(self, score: int) -> bool:
        """Append ``score``, keep the best ``max_entries`` and write back.

        Returns False (after logging a warning) when the write fails.
        """
        entries = self.load()
        entries.append(HighScoreEntry(score=int(score), date=self._now().strftime(TIMESTAMP_FORMAT)))
        # Stable sort: among equal scores the earlier entry stays ahead
        entries.sort(key=lambda e: e.score, reverse=True)
        top = entries[: self.max_entries]
        try:
            self.store.set(self.key, encode_entries(top))
        except (StorageError, OSError) as e:
            logger.warning("Could not save score %d: %s", score, e)
            return False
        logger.info("Recorded score %d (%d entries kept)", score, len(top))
        return True


__all__ = ["SCORES_KEY", "MAX_ENTRIES", "HighScoreEntry", "HighScoreTable", "decode_entries", "encode_entries"]
