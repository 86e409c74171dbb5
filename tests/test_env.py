from __future__ import annotations

import gymnasium as gym
import numpy as np
import pytest

import tetris_rl.env  # noqa: F401
from tetris_rl.env.tetris_env import TetrisEnv
from tetris_rl.game import Action, GameState


def test_registered_env_resets():
    env = gym.make("Tetris-10x20-v0")
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (20, 10)
    assert 1 <= obs["next"] <= 7
    assert obs["hold"] == 0
    assert obs["can_hold"] == 1
    assert env.observation_space.contains(obs)
    assert info["state"] == "PLAYING"
    env.close()


def test_seeded_resets_are_reproducible():
    env = TetrisEnv()
    first, _ = env.reset(seed=3)
    kinds = [env.game.active_piece.kind, env.game.next_kind]
    env.reset(seed=3)
    assert [env.game.active_piece.kind, env.game.next_kind] == kinds
    assert np.array_equal(first["grid"], env.reset(seed=3)[0]["grid"])


def test_hard_drop_reward_is_score_delta():
    env = TetrisEnv()
    env.reset(seed=1)
    ghost = env.game.ghost_y()
    start_y = env.game.active_piece.y
    obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
    assert reward == pytest.approx(2 * (ghost - start_y))
    assert not terminated and not truncated
    assert info["events"]["piece-locked"] == 1


def test_hold_action_shows_in_observation():
    env = TetrisEnv()
    env.reset(seed=2)
    kind = int(env.game.active_piece.kind)
    obs, *_ = env.step(int(Action.HOLD))
    assert obs["hold"] == kind
    assert obs["can_hold"] == 0


def test_start_level_option():
    env = TetrisEnv()
    _, info = env.reset(seed=0, options={"start_level": 5})
    assert info["level"] == 5


def test_random_rollout_ends():
    env = TetrisEnv(max_episode_steps=5_000, terminal_penalty=-10.0)
    env.reset(seed=4)
    env.action_space.seed(4)
    for _ in range(5_000):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        if terminated or truncated:
            break
    assert terminated or truncated
    if terminated:
        assert env.game.state == GameState.GAMEOVER
        assert info["high_score"] == info["score"]


def test_step_before_reset_raises():
    env = TetrisEnv()
    with pytest.raises(RuntimeError):
        env.step(0)


def test_rgb_render():
    env = TetrisEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8
    assert TetrisEnv().render() is None
