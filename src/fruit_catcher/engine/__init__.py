"""Game-state engine.

Submodules are imported directly (``fruit_catcher.engine.core`` and friends)
so that light modules such as ``state`` can be used without pulling in the
renderer or score storage.
"""
