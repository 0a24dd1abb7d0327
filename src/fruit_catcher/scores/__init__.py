"""High-score persistence.

``HighScoreTable`` keeps a small leaderboard as JSON under one key of a
``KeyValueStore``. ``JsonFileStore`` is the durable store used by the game;
``MemoryStore`` serves tests and throwaway sessions.
"""

from .store import JsonFileStore, KeyValueStore, MemoryStore
from .table import MAX_ENTRIES, SCORES_KEY, HighScoreEntry, HighScoreTable

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "HighScoreEntry",
    "HighScoreTable",
    "SCORES_KEY",
    "MAX_ENTRIES",
]
