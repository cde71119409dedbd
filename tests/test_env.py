import unittest

import gymnasium as gym
import numpy as np

import blockfall.env  # noqa: F401
from blockfall.env.blockfall_env import BlockfallEnv
from blockfall.game import Action, ActivePiece, EngineState, TetrominoType
from blockfall.rl.random_agent import run_random

from scripted_random import ScriptedRandom


class TestBlockfallEnv(unittest.TestCase):
    def test_given_reset_then_observation_in_space_and_engine_running(self):
        env = BlockfallEnv()
        obs, info = env.reset(seed=0)
        self.assertEqual(obs.shape, (20, 10))
        self.assertTrue(env.observation_space.contains(obs))
        self.assertIs(env.engine.state, EngineState.RUNNING)
        self.assertEqual(info["action_mask"].dtype, np.bool_)
        self.assertTrue(info["action_mask"][int(Action.HARD_DROP)])
        self.assertTrue((obs < 0).any())

    def test_given_hard_drop_then_reward_is_score_gained(self):
        env = BlockfallEnv(reward_scale=0.5)
        env.reset(seed=1)
        obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        self.assertGreater(reward, 0.0)
        self.assertEqual(reward, info["score"] * 0.5)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info["outcome"], "locked")

    def test_given_gravity_every_step_then_piece_falls_on_noop(self):
        env = BlockfallEnv(gravity_every=1)
        env.reset(seed=2)
        env.step(int(Action.NONE))
        self.assertEqual(env.engine.piece.y, 1)

    def test_given_clearing_drop_then_gravity_lock_then_step_keeps_cleared_rows(self):
        env = BlockfallEnv(gravity_every=1)
        env.reset(seed=0)
        engine = env.engine
        engine.rng = ScriptedRandom([1, 2])
        engine.piece = ActivePiece.spawn(TetrominoType.I, color=2, x=0, y=0)
        engine.grid.cells[19, 4:] = 1
        engine.grid.cells[0, 4:] = 1
        obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        self.assertTrue(terminated)
        self.assertEqual(info["outcome"], "game_over")
        self.assertEqual(info["lines_cleared"], 1)
        self.assertEqual(reward, 19 * 2 + 40)

    def test_given_step_limit_then_truncated(self):
        env = BlockfallEnv(max_episode_steps=2)
        env.reset(seed=3)
        self.assertFalse(env.step(int(Action.NONE))[3])
        self.assertTrue(env.step(int(Action.NONE))[3])

    def test_given_out_of_range_action_then_error(self):
        env = BlockfallEnv()
        env.reset(seed=4)
        with self.assertRaises(ValueError):
            env.step(len(Action))

    def test_given_ansi_mode_then_text_board(self):
        env = BlockfallEnv(render_mode="ansi")
        env.reset(seed=5)
        text = env.render()
        self.assertEqual(len(text.splitlines()), 20)
        self.assertIn("@", text)

    def test_given_registered_id_then_gym_make_builds_env(self):
        env = gym.make("Blockfall-v0")
        obs, _ = env.reset(seed=6)
        self.assertEqual(obs.shape, (20, 10))
        env.close()

    def test_given_random_agent_then_rollout_completes(self):
        self.assertIsInstance(run_random(steps=30, seed=0), float)


if __name__ == "__main__":
    unittest.main()
