from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

from blockfall.game import (
    ActivePiece,
    GameConfig,
    GameEngine,
    GameGrid,
    Outcome,
    StepResult,
    format_grid,
    rotate_cw,
)


logger = logging.getLogger(__name__)

_LOCK_OUTCOMES = (Outcome.LOCKED, Outcome.LINES_CLEARED, Outcome.GAME_OVER)


def _landing(grid: GameGrid, piece: ActivePiece) -> Optional[ActivePiece]:
    if grid.collides(piece.cells()):
        return None
    while not grid.collides(piece.moved(0, 1).cells()):
        piece = piece.moved(0, 1)
    return piece


def choose_placement(engine: GameEngine) -> Tuple[int, int]:
    """Pick ``(rotations, target_x)`` favouring cleared lines, then few holes, then low stacks."""
    assert engine.piece is not None
    best: Optional[Tuple[float, int, int]] = None
    shape = engine.piece.shape
    for rotations in range(4):
        width = shape.shape[1]
        for x in range(engine.grid.width - width + 1):
            landed = _landing(engine.grid, engine.piece.with_shape(shape, x))
            if landed is None:
                continue
            trial = engine.grid.copy()
            trial.merge(landed)
            lines = trial.clear_full_lines()
            value = lines * 10.0 - trial.count_holes() * 4.0 - trial.get_max_height()
            if best is None or value > best[0]:
                best = (value, rotations, x)
        shape = rotate_cw(shape)
    if best is None:
        return 0, engine.piece.x
    return best[1], best[2]


def _steer(engine: GameEngine, rotations: int, target_x: int, frame_ms: int) -> Optional[StepResult]:
    """Rotate and shift toward the target, ticking between commands.

    Returns the tick result if gravity locked the piece on the way, else ``None``.
    """
    for _ in range(rotations):
        engine.rotate()
        gravity = engine.tick(frame_ms)
        if gravity.outcome in _LOCK_OUTCOMES:
            return gravity
    while engine.piece is not None and engine.piece.x != target_x:
        if not engine.move(1 if target_x > engine.piece.x else -1):
            break
        gravity = engine.tick(frame_ms)
        if gravity.outcome in _LOCK_OUTCOMES:
            return gravity
    return None


def play(seed: int = 0, pieces: int = 200, frame_ms: int = 16, quiet: bool = False) -> GameEngine:
    engine = GameEngine(GameConfig(random_seed=seed))
    engine.start()
    placed = 0
    while placed < pieces and not engine.game_over:
        rotations, target_x = choose_placement(engine)
        result = _steer(engine, rotations, target_x, frame_ms)
        if result is None:
            result = engine.hard_drop()
        placed += 1
        if result.outcome is Outcome.LINES_CLEARED:
            logger.info("piece %d cleared %d line(s), score %d", placed, result.lines_cleared, engine.score)
        if not quiet:
            print(format_grid(engine.get_state()))
            print()
    return engine


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play a seeded Blockfall game with a greedy placement policy.")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--pieces", type=int, default=200)
    p.add_argument("--log-level", type=str, default="WARNING")
    p.add_argument("--quiet", action="store_true", help="Only print the final summary")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    engine = play(seed=args.seed, pieces=args.pieces, quiet=args.quiet)
    print(f"score={engine.score} lines={engine.lines} level={engine.level} state={engine.state.value}")


if __name__ == "__main__":  # pragma: no cover
    main()
