from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Protocol

import numpy as np

from .grid import COLS, ROWS, GameGrid
from .pieces import PALETTE, SHAPES, ActivePiece, TetrominoType, rotate_cw
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``randrange``; ``random.Random`` qualifies."""

    def randrange(self, start: int, stop: int) -> int:
        ...


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class EngineState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Outcome(Enum):
    OK = "ok"
    REJECTED = "rejected"
    LOCKED = "locked"
    LINES_CLEARED = "lines_cleared"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class StepResult:
    outcome: Outcome
    lines_cleared: int = 0
    points: int = 0

    def __bool__(self) -> bool:
        return self.outcome is not Outcome.REJECTED


REJECTED = StepResult(Outcome.REJECTED)
OK = StepResult(Outcome.OK)


@dataclass
class GameConfig:
    width: int = COLS
    height: int = ROWS
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")


class GameEngine:
    """Falling-block game logic driven by host commands and ``tick`` calls.

    The engine is passive: it never schedules itself and never raises for
    commands issued in the wrong state. Every command returns a
    :class:`StepResult` the host uses to decide what to draw or play.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.piece: Optional[ActivePiece] = None
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = self.rules.base_drop_interval
        self.state = EngineState.READY
        self._elapsed_ms = 0
        self.reset()

    # ---------- Lifecycle ----------
    def reset(self, seed: Optional[int] = None) -> StepResult:
        if seed is not None:
            self.rng = random.Random(seed)
        self.grid.reset()
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval_for_level(1)
        self._elapsed_ms = 0
        self.state = EngineState.READY
        self.piece = None
        self._spawn_piece()
        return OK

    def start(self) -> StepResult:
        if self.state not in (EngineState.READY, EngineState.PAUSED):
            logger.debug("start rejected in state %s", self.state.value)
            return REJECTED
        self.state = EngineState.RUNNING
        self._elapsed_ms = 0
        return OK

    def pause(self) -> StepResult:
        if self.state is not EngineState.RUNNING:
            logger.debug("pause rejected in state %s", self.state.value)
            return REJECTED
        self.state = EngineState.PAUSED
        return OK

    def resume(self) -> StepResult:
        if self.state is not EngineState.PAUSED:
            logger.debug("resume rejected in state %s", self.state.value)
            return REJECTED
        self.state = EngineState.RUNNING
        self._elapsed_ms = 0
        return OK

    # ---------- Pieces ----------
    def _spawn_piece(self) -> Optional[ActivePiece]:
        """Replace the active piece with a random one at the top center.

        Returns the new piece, or ``None`` after switching to game over when the
        spawn position is already blocked.
        """
        kind = TetrominoType(self.rng.randrange(1, len(SHAPES)))
        color = self.rng.randrange(1, len(PALETTE))
        piece = ActivePiece.spawn(kind, color, self.grid.width // 2 - 1, self.config.spawn_y)
        if self.collides(piece):
            self.piece = None
            self.state = EngineState.GAME_OVER
            logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
            return None
        self.piece = piece
        return piece

    def collides(self, piece: ActivePiece) -> bool:
        return self.grid.collides(piece.cells())

    def _can_act(self, command: str) -> bool:
        if self.state is not EngineState.RUNNING or self.piece is None:
            logger.debug("%s rejected in state %s", command, self.state.value)
            return False
        return True

    # ---------- Commands ----------
    def move(self, direction: int) -> StepResult:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")
        if not self._can_act("move"):
            return REJECTED
        candidate = self.piece.moved(direction, 0)
        if self.collides(candidate):
            return REJECTED
        self.piece = candidate
        return OK

    def move_left(self) -> StepResult:
        return self.move(-1)

    def move_right(self) -> StepResult:
        return self.move(1)

    def _kick_placement(self, piece: ActivePiece) -> Optional[ActivePiece]:
        rotated = rotate_cw(piece.shape)
        for x in (piece.x, piece.x - 1, piece.x + 1):
            candidate = piece.with_shape(rotated, x)
            if not self.collides(candidate):
                return candidate
        return None

    def rotate(self) -> StepResult:
        if not self._can_act("rotate"):
            return REJECTED
        candidate = self._kick_placement(self.piece)
        if candidate is None:
            return REJECTED
        self.piece = candidate
        return OK

    def soft_drop(self) -> StepResult:
        if not self._can_act("soft_drop"):
            return REJECTED
        candidate = self.piece.moved(0, 1)
        if self.collides(candidate):
            return self._lock()
        self.piece = candidate
        return OK

    def hard_drop(self) -> StepResult:
        if not self._can_act("hard_drop"):
            return REJECTED
        rows = 0
        piece = self.piece
        while not self.collides(piece.moved(0, 1)):
            piece = piece.moved(0, 1)
            rows += 1
        self.piece = piece
        drop_points = self.rules.score_for_hard_drop(rows)
        self.score += drop_points
        result = self._lock()
        return StepResult(result.outcome, result.lines_cleared, result.points + drop_points)

    def _lock(self) -> StepResult:
        assert self.piece is not None
        self.grid.merge(self.piece)
        logger.debug("locked %s at (%d, %d)", self.piece.kind.name, self.piece.x, self.piece.y)
        score_before = self.score
        cleared = self.clear_lines()
        points = self.score - score_before
        if self._spawn_piece() is None:
            return StepResult(Outcome.GAME_OVER, cleared, points)
        if cleared:
            return StepResult(Outcome.LINES_CLEARED, cleared, points)
        return StepResult(Outcome.LOCKED, 0, points)

    def clear_lines(self) -> int:
        """Remove full rows and apply line score, line count and level progression."""
        cleared = self.grid.clear_full_lines()
        if cleared == 0:
            return 0
        self.score += self.rules.score_for_lines(cleared, self.level)
        self.lines += cleared
        logger.debug("cleared %d line(s), total %d", cleared, self.lines)
        new_level = self.rules.level_for_lines(self.lines)
        if new_level != self.level:
            self.level = new_level
            self.drop_interval = self.rules.drop_interval_for_level(new_level)
            logger.info("level %d, drop interval %d ms", self.level, self.drop_interval)
        return cleared

    def tick(self, delta_ms: int) -> StepResult:
        """Advance the gravity timer; drops the piece one row once the interval is exceeded."""
        if self.state is not EngineState.RUNNING:
            return REJECTED
        self._elapsed_ms += delta_ms
        if self._elapsed_ms > self.drop_interval:
            self._elapsed_ms = 0
            return self.soft_drop()
        return OK

    def step(self, action: Action) -> StepResult:
        action = Action(action)
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE_CW:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return OK if self.state is EngineState.RUNNING else REJECTED

    # ---------- Queries ----------
    @property
    def game_over(self) -> bool:
        return self.state is EngineState.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.state is EngineState.PAUSED

    def available_actions(self) -> List[Action]:
        if self.state is not EngineState.RUNNING or self.piece is None:
            return []
        actions: List[Action] = []
        if not self.collides(self.piece.moved(-1, 0)):
            actions.append(Action.LEFT)
        if not self.collides(self.piece.moved(1, 0)):
            actions.append(Action.RIGHT)
        if self._kick_placement(self.piece) is not None:
            actions.append(Action.ROTATE_CW)
        actions.extend([Action.SOFT_DROP, Action.HARD_DROP, Action.NONE])
        return actions

    def grid_snapshot(self) -> np.ndarray:
        return self.grid.clone_state()

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.piece is not None and not self.game_over:
            for x, y in self.piece.cells():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.piece.color
        return state

    def get_info(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
            "drop_interval": self.drop_interval,
            "game_over": self.game_over,
            "paused": self.paused,
        }
