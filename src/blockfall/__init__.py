"""Blockfall: a falling-block puzzle game engine."""

from .game import Action, EngineState, GameConfig, GameEngine, Outcome, ScoringRules, StepResult
from .leaderboard import Leaderboard, ScoreEntry

__all__ = [
    "Action",
    "EngineState",
    "GameConfig",
    "GameEngine",
    "Outcome",
    "ScoringRules",
    "StepResult",
    "Leaderboard",
    "ScoreEntry",
]
