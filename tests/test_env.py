import gymnasium as gym
import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

import block_blast.env  # noqa: F401
from block_blast.env import BlockBlastEnv
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from block_blast.game import GameConfig, ShapeType

from tests.helpers import shape_piece


def test_env_passes_gymnasium_checker():
    check_env(BlockBlastEnv(), skip_render_check=True)


def test_registered_id_builds_env():
    env = gym.make("BlockBlast-8x8-v0")
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (8, 8)
    assert obs["pieces"].shape == (3, 3, 3)
    assert obs["pieces_remaining"] == 3
    assert (obs["colors"] >= 1).all()
    env.close()


def test_reset_is_deterministic_for_a_seed():
    env = BlockBlastEnv()
    a, _ = env.reset(seed=5)
    b, _ = env.reset(seed=5)
    assert np.array_equal(a["pieces"], b["pieces"])
    assert np.array_equal(a["colors"], b["colors"])


def test_piece_stencils_are_padded_into_observation():
    env = BlockBlastEnv()
    obs, _ = env.reset(seed=3)
    for i, piece in enumerate(env.game.pieces):
        assert int(obs["pieces"][i].sum()) == piece.cell_count
        assert obs["colors"][i] == piece.color


def test_action_mask_matches_valid_actions():
    env = BlockBlastEnv()
    _, info = env.reset(seed=1)
    mask = info["action_mask"]
    assert mask.shape == (3, 8, 8)
    assert int(mask.sum()) == len(env.game.get_valid_actions())


def test_valid_step_rewards_score_and_repeat_is_penalised():
    env = BlockBlastEnv()
    env.reset(seed=2)
    cells = env.game.pieces[0].cell_count
    obs, reward, terminated, truncated, info = env.step((0, 0, 0))
    assert info["engine_score_delta"] == cells * 10
    assert reward == pytest.approx(0.1 * cells)
    assert obs["colors"][0] == 0
    assert not terminated and not truncated

    _, reward, _, _, info = env.step((0, 0, 0))
    assert reward == -0.1
    assert info["rejection"] == "empty_slot"


def test_truncates_at_max_episode_steps():
    env = BlockBlastEnv(config=GameConfig(max_episode_steps=2))
    env.reset(seed=0)
    _, _, _, truncated, _ = env.step((0, 7, 7))
    assert not truncated
    _, _, _, truncated, _ = env.step((0, 7, 7))
    assert truncated


def test_env_keeps_caller_config_untouched():
    config = GameConfig(auto_reset=True)
    env = BlockBlastEnv(config=config)
    assert config.auto_reset
    assert not env.game.config.auto_reset


def test_rgb_render():
    env = BlockBlastEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (96, 96, 3)
    assert img.dtype == np.uint8


def test_flatten_wrapper_round_trips_indices():
    env = FlattenDiscreteActionWrapper(BlockBlastEnv())
    assert env.action_space.n == 192
    assert env._unflatten(0) == (0, 0, 0)
    assert env._unflatten(191) == (2, 7, 7)
    assert env._unflatten(64 + 8 * 2 + 3) == (1, 2, 3)
    env.reset(seed=0)
    assert env.get_action_mask().shape == (192,)


def test_resample_wrapper_replaces_invalid_actions():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockBlastEnv()))
    env.reset(seed=4)
    game = env.unwrapped.game
    game._pieces = [shape_piece(ShapeType.SQUARE_3)] * 3
    # slot 0, row 7, col 7
    _, _, _, _, info = env.step(63)
    assert "rejection" not in info
    assert game.step_count == 1
