"""
Connections - Word-grouping puzzle ("find four groups of four").

Usage:
    from connections import PuzzleEngine, build_view
    from connections.puzzle import ToggleTile, Submit

    engine = PuzzleEngine()
    engine.dispatch(ToggleTile("Nile"))
    view = build_view(engine)
"""

from .game_engine import GamePhase, InvariantError, PuzzleEngine, PuzzleState
from .presentation import GameView, build_view

__all__ = [
    "GamePhase",
    "InvariantError",
    "PuzzleEngine",
    "PuzzleState",
    "GameView",
    "build_view",
]
