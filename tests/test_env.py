"""Gymnasium environment and factory tests."""

from __future__ import annotations

import numpy as np
import pytest

from robot_arm_sim.envs import PickPlaceArmConfig, PickPlaceArmEnv, make_sim_env
from robot_arm_sim.envs.configs import SimEnvConfig
from robot_arm_sim.envs.factory import _env_class_for_config
from robot_arm_sim.utils.constants import BASE


@pytest.fixture
def env():
    env = PickPlaceArmEnv()
    yield env
    env.close()


def test_reset_observation(env):
    obs, info = env.reset(seed=0)
    assert obs["agent_pos"].shape == (11,)
    assert obs["agent_pos"].dtype == np.float32
    assert env.observation_space.contains(obs)
    assert not info["is_success"]
    assert info["status"] == "reset"


def test_pixel_observations():
    env = PickPlaceArmEnv(PickPlaceArmConfig(obs_type="pixels_agent_pos"))
    obs, _ = env.reset()
    assert obs["pixels"].shape == (320, 480, 3)
    assert obs["pixels"].dtype == np.uint8
    env.close()


def test_step_nudges_joints(env):
    env.reset()
    obs, reward, terminated, truncated, info = env.step(np.array([1.0, 0, 0, 0, 0]))
    assert obs["agent_pos"][BASE] == pytest.approx(3.0)
    assert reward < 0
    assert not terminated
    assert not truncated
    assert info["status"] == "manual_keyboard"


def test_step_rejects_bad_action_shape(env):
    env.reset()
    with pytest.raises(ValueError):
        env.step(np.zeros(4))


def test_gripper_action_out_of_reach(env):
    env.reset()
    _, _, _, _, info = env.step(np.array([0, 0, 0, 0, 1.0]))
    assert info["status"] == "too_far"
    assert not info["carried"]


def test_drop_zone_matches_place_pose(env):
    np.testing.assert_allclose(env.drop_zone, [-5.624, -1.6, 0.492], atol=0.02)


def test_scripted_cycle_terminates_with_success(env):
    env.reset()
    env.controller.request_automation_toggle()
    zero = np.zeros(5)
    for _ in range(500):
        _, _, terminated, truncated, info = env.step(zero)
        if terminated or truncated:
            break
    assert terminated
    assert info["is_success"]
    assert info["status"] == "task_complete"


def test_truncates_at_episode_length():
    env = PickPlaceArmEnv(PickPlaceArmConfig(episode_length=3))
    env.reset()
    results = [env.step(np.zeros(5)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]
    env.close()


def test_render_rgb_array(env):
    env.reset()
    image = env.render()
    assert image.shape == (320, 480, 3)


def test_config_resolves_preset():
    cfg = PickPlaceArmConfig(preset="free_wrist")
    assert cfg.arm.name == "free_wrist"
    assert cfg.gym_kwargs["max_episode_steps"] == 1500
    with pytest.raises(ValueError):
        PickPlaceArmConfig(preset="nope")


def test_make_sim_env_vectorises():
    envs = make_sim_env("classic", n_envs=2)
    vec = envs["PickPlaceArm-v0"][0]
    obs, _ = vec.reset(seed=0)
    assert obs["agent_pos"].shape == (2, 11)
    vec.close()


def test_make_sim_env_validation():
    with pytest.raises(ValueError):
        make_sim_env("unknown")
    with pytest.raises(ValueError):
        make_sim_env("classic", n_envs=0)


def test_env_class_only_for_arm_config():
    class OtherConfig(SimEnvConfig):
        @property
        def gym_kwargs(self) -> dict:
            return {}

    assert _env_class_for_config(PickPlaceArmConfig()) is PickPlaceArmEnv
    with pytest.raises(ValueError):
        _env_class_for_config(OtherConfig())
