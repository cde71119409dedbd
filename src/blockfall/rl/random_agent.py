from __future__ import annotations

import numpy as np
import gymnasium as gym

import blockfall.env  # noqa: F401


def run_random(steps: int = 200, seed: int = 0) -> float:
    env = gym.make("Blockfall-v0")
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # Prefer actions the engine would accept
        valid = np.flatnonzero(info.get("action_mask", []))
        if valid.size:
            action = int(rng.choice(valid))
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
