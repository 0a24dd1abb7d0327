"""
Fruit Catcher package root.

A timed lane-based catching game. The simulation lives in ``engine`` and is
kept free of any rendering backend; ``render`` turns engine state into draw
commands that a surface (Arcade, or a recorder in tests) executes.
"""

__version__ = "0.1.0"

__all__ = [
    "engine",
    "__version__",
]
