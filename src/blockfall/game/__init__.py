"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- GameGrid: Fixed playfield, collision, locking and line clearing
- ActivePiece: Falling tetromino value with rotation helpers
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear scores, level and drop-interval formulas
- GameEngine: State machine driven by host commands and ticks
"""

from .grid import COLS, ROWS, GameGrid
from .pieces import PALETTE, SHAPES, ActivePiece, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import (
    Action,
    EngineState,
    GameConfig,
    GameEngine,
    Outcome,
    RandomSource,
    StepResult,
)
from .text import format_grid, print_grid

__all__ = [
    "COLS",
    "ROWS",
    "GameGrid",
    "PALETTE",
    "SHAPES",
    "ActivePiece",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "Action",
    "EngineState",
    "GameConfig",
    "GameEngine",
    "Outcome",
    "RandomSource",
    "StepResult",
    "format_grid",
    "print_grid",
]
