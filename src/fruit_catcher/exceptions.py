class FruitCatcherError(Exception):
    """Base exception for the Fruit Catcher project."""


class StorageError(FruitCatcherError):
    """Raised when the key-value store cannot be read or written."""


class CorruptScoresError(StorageError):
    """Raised when a stored leaderboard cannot be decoded."""
