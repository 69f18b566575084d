from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401  ensure registration


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> dict:
    rng = random.Random(seed)
    env = gym.make("BlockBlast-8x8-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    best_score = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = np.argwhere(info["action_mask"])
        if valid.size:
            action = valid[rng.randrange(len(valid))]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_score = max(best_score, int(info["score"]))
        if terminated or truncated:
            episodes += 1
            logger.debug("episode %d finished with score %d", episodes, info["score"])
            obs, info = env.reset()
    env.close()
    return {"total_reward": total_reward, "episodes": episodes, "best_score": best_score}


def main() -> None:  # pragma: no cover
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    stats = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {stats['total_reward']:.2f} "
          f"episodes: {stats['episodes']} best score: {stats['best_score']}")


if __name__ == "__main__":  # pragma: no cover
    main()
