from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

__all__ = [
    "APP_NAME",
    "ENV_DATA_DIR",
    "get_data_dir",
    "get_scores_path",
    "ensure_exists",
]

APP_NAME = "fruit-catcher"

# Environment override, useful for tests and portable installs
ENV_DATA_DIR = "FRUIT_CATCHER_DATA_DIR"

_logger = logging.getLogger(__name__)


def ensure_exists(path: Path) -> None:
    """Create the directory if it doesn't exist. Log and raise on failure."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _logger.error("Failed to create directory '%s': %s", path, exc)
        raise


def get_data_dir(override: Optional[Path] = None, create: bool = True) -> Path:
    """Return the directory holding user data.

    Precedence: explicit ``override``, then $FRUIT_CATCHER_DATA_DIR, then the
    platform user data dir (e.g. ~/.local/share/fruit-catcher on Linux).
    """
    if override is not None:
        root = Path(override).expanduser()
    else:
        env = os.getenv(ENV_DATA_DIR, "").strip()
        if env:
            root = Path(env).expanduser()
        else:
            root = Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)
    if create:
        ensure_exists(root)
    return root


def get_scores_path(override: Optional[Path] = None, create: bool = True) -> Path:
    """Return the JSON file backing the key-value store."""
    return get_data_dir(override, create=create) / "store.json"


if __name__ == "__main__":  # pragma: no cover - manual debugging aid
    logging.basicConfig(level=logging.INFO)
    print(f"Data dir: {get_data_dir(create=False)}")
    print(f"Store file: {get_scores_path(create=False)}")
