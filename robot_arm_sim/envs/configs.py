"""
Dataclass configurations for the Gymnasium environments.

Classes:
    SimEnvConfig: Abstract base configuration shared by all sim envs.
    PickPlaceArmConfig: Configuration for the pick-and-place arm task.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional

from robot_arm_sim.configs import ArmSimConfig, make_config
from robot_arm_sim.utils.constants import (
    DEFAULT_FPS,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
)


@dataclass
class SimEnvConfig(abc.ABC):
    """Base configuration shared by all robot_arm_sim environments.

    Attributes:
        task: Human-readable task identifier.
        fps: Simulation frames per second.
        episode_length: Maximum steps per episode.
        obs_type: Observation mode (``'pixels_agent_pos'``, ``'agent_pos'``).
        render_mode: Gymnasium render mode (``'rgb_array'``, ``'human'``).
        observation_height: Pixel height of rendered observations.
        observation_width: Pixel width of rendered observations.
        seed: Random seed for reproducibility.
    """

    task: str = "base"
    fps: int = DEFAULT_FPS
    episode_length: int = 300
    obs_type: str = "agent_pos"
    render_mode: str = "rgb_array"
    observation_height: int = DEFAULT_RENDER_HEIGHT
    observation_width: int = DEFAULT_RENDER_WIDTH
    seed: int = 42

    @property
    def env_type(self) -> str:
        """Return a short string identifying the environment type.

        Returns:
            The ``task`` field value.
        """
        return self.task

    @property
    @abc.abstractmethod
    def gym_kwargs(self) -> dict:
        """Return keyword arguments forwarded to ``gymnasium.make()``.

        Returns:
            A dictionary of environment-specific kwargs.
        """
        raise NotImplementedError


@dataclass
class PickPlaceArmConfig(SimEnvConfig):
    """Configuration for the four-joint pick-and-place environment.

    The agent nudges the four joints and commands the gripper.  A cube must
    be picked up and released inside the drop zone, the spot the scripted
    sequence places it.

    Attributes:
        task: Fixed to ``'PickPlaceArm-v0'``.
        episode_length: 1500 steps per episode.
        action_dim: Four joint nudges plus a gripper command.
        state_dim: Joints (4) + tip xyz (3) + object xyz (3) + carried flag (1).
        preset: Name of the arm preset used when ``arm`` is not given.
        drop_zone_radius: Horizontal tolerance for a successful placement.
        arm: Arm configuration; built from ``preset`` when None.
    """

    task: str = "PickPlaceArm-v0"
    episode_length: int = 1500
    action_dim: int = 5
    state_dim: int = 11
    preset: str = "classic"
    drop_zone_radius: float = 1.5
    arm: Optional[ArmSimConfig] = None

    def __post_init__(self) -> None:
        """Resolve the arm configuration from the preset name."""
        if self.arm is None:
            self.arm = make_config(self.preset)
        if self.drop_zone_radius <= 0:
            raise ValueError("drop_zone_radius must be positive")

    @property
    def gym_kwargs(self) -> dict:
        """Return PickPlaceArm-specific Gymnasium kwargs.

        Returns:
            Dictionary with ``obs_type``, ``render_mode``, and ``max_episode_steps``.
        """
        return {
            "obs_type": self.obs_type,
            "render_mode": self.render_mode,
            "max_episode_steps": self.episode_length,
        }
