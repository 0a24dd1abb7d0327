from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .app import run_auto, run_gui, run_headless


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fruit-catcher",
        description="Fruit Catcher - catch fruit, dodge bombs, 30 seconds on the clock",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N frames (headless)")
    parser.add_argument("--tick-rate", type=float, default=None, help="Target frame rate (Hz); headless default 0 = unthrottled")
    parser.add_argument("--seed", type=int, default=None, help="Seed for item spawning")
    parser.add_argument("--lanes", default=None, help="Headless lane script, e.g. 'left,center,right'")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for the high score store")
    parser.add_argument("--background", default=None, help="Background image for the GUI")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    common = dict(data_dir=args.data_dir, seed=args.seed)

    # Honor CLI over env vars
    if args.gui:
        os.environ["FRUIT_CATCHER_GUI"] = "1"
        os.environ.pop("FRUIT_CATCHER_HEADLESS", None)
        return run_gui(background=args.background, tick_rate=args.tick_rate or 60.0, **common)

    headless = dict(lanes=args.lanes, max_steps=args.max_steps, tick_rate=args.tick_rate or 0.0, **common)
    if args.headless:
        os.environ["FRUIT_CATCHER_HEADLESS"] = "1"
        os.environ.pop("FRUIT_CATCHER_GUI", None)
        return run_headless(**headless)

    if os.getenv("FRUIT_CATCHER_HEADLESS") == "1":
        return run_headless(**headless)
    return run_auto(background=args.background, **headless)


if __name__ == "__main__":
    sys.exit(main())
