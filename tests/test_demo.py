import unittest

import numpy as np

from blockfall.demo import choose_placement, play
from blockfall.game import EngineState, GameConfig, GameEngine, format_grid


class TestDemo(unittest.TestCase):
    def test_given_seed_when_playing_then_pieces_placed_and_scored(self):
        engine = play(seed=1, pieces=30, quiet=True)
        self.assertIn(engine.state, (EngineState.RUNNING, EngineState.GAME_OVER))
        self.assertGreater(engine.score, 0)

    def test_given_same_seed_then_same_result(self):
        a = play(seed=9, pieces=25, quiet=True)
        b = play(seed=9, pieces=25, quiet=True)
        self.assertEqual((a.score, a.lines), (b.score, b.lines))
        np.testing.assert_array_equal(a.grid_snapshot(), b.grid_snapshot())

    def test_given_empty_grid_then_placement_within_bounds(self):
        engine = GameEngine(GameConfig(random_seed=0))
        rotations, x = choose_placement(engine)
        self.assertTrue(0 <= rotations < 4)
        self.assertTrue(0 <= x < engine.grid.width)


class TestFormatGrid(unittest.TestCase):
    def test_given_cells_then_symbols(self):
        state = np.array([[0, 3], [-2, 0]], dtype=np.int8)
        self.assertEqual(format_grid(state), ".#\n@.")


if __name__ == "__main__":
    unittest.main()
