"""
Pick-and-place arm environment (Gymnasium-compatible).

Wraps ``ArmController`` so that agents drive the arm through the same
manual front door as sliders and the keyboard: every joint nudge passes the
floor gate and joint limits, and grabbing is gated by the grasp radius.

Classes:
    PickPlaceArmEnv: Gymnasium environment for the pick-and-place task.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from robot_arm_sim.control.controller import ArmController, FrameSnapshot, InputSource
from robot_arm_sim.envs.configs import PickPlaceArmConfig
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, NUM_JOINTS, UPPER_ARM, WRIST
from robot_arm_sim.visualization.renderer import ArmRenderer

_ACTION_DEADZONE = 1e-3
_GRIPPER_THRESHOLD = 0.5


class PickPlaceArmEnv(gym.Env):
    """Gymnasium environment for the four-joint pick-and-place task.

    Actions are ``[base, lower, upper, wrist, gripper]`` in ``[-1, 1]``.  The
    joint entries are scaled by the configured nudge step; the gripper entry
    grabs above +0.5 and releases below -0.5.

    Attributes:
        metadata: Gymnasium metadata with supported render modes.
        cfg: ``PickPlaceArmConfig`` controlling episode length, resolution, etc.
        controller: The arm core driven by this environment.
    """

    metadata: Dict[str, Any] = {"render_modes": ["rgb_array", "human"]}

    def __init__(self, cfg: PickPlaceArmConfig | None = None) -> None:
        """Initialise the environment.

        Args:
            cfg: Optional configuration; a default ``PickPlaceArmConfig`` is
                used when *None*.
        """
        super().__init__()
        self.cfg = cfg or PickPlaceArmConfig()
        self.render_mode = self.cfg.render_mode
        self.controller = ArmController(self.cfg.arm)
        self._renderer = ArmRenderer.from_config(
            self.cfg.arm, self.cfg.observation_width, self.cfg.observation_height
        )
        self._viz = None
        self._step_count = 0
        self._frame = self.controller.snapshot()
        self._drop_zone = self._compute_drop_zone()
        self._init_spaces()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        self.action_space = spaces.Box(
            low=-1.0, high=1.0, shape=(self.cfg.action_dim,), dtype=np.float32
        )
        obs_dict: Dict[str, spaces.Space] = {}
        obs_dict["agent_pos"] = spaces.Box(
            low=-360.0, high=360.0, shape=(self.cfg.state_dim,), dtype=np.float32
        )
        if "pixels" in self.cfg.obs_type:
            h, w = self.cfg.observation_height, self.cfg.observation_width
            obs_dict["pixels"] = spaces.Box(low=0, high=255, shape=(h, w, 3), dtype=np.uint8)
        self.observation_space = spaces.Dict(obs_dict)

    def _compute_drop_zone(self) -> np.ndarray:
        """World point below the tip at the scripted place pose."""
        arm = self.controller.arm
        wp = self.cfg.arm.waypoints
        joints = np.zeros(NUM_JOINTS)
        joints[BASE] = wp.drop_base
        joints[LOWER_ARM], joints[UPPER_ARM] = wp.place
        joints[WRIST] = self.cfg.arm.default_joints[WRIST]
        tip = arm.kinematics.compute_pose(joints).wrist_tip_world
        return np.array([tip[0], self.cfg.arm.object_rest_y, tip[2]], dtype=np.float64)

    @property
    def drop_zone(self) -> np.ndarray:
        return self._drop_zone.copy()

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the arm and the cube and return the initial observation.

        Args:
            seed: Optional RNG seed.
            options: Unused; for Gymnasium compatibility.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        self._step_count = 0
        self.controller.request_reset()
        self._frame = self.controller.snapshot()
        return self._build_observation(), self._build_info(False)

    def _apply_joint_actions(self, action: np.ndarray) -> None:
        step = self.cfg.arm.nudge_step
        for index in range(NUM_JOINTS):
            if abs(action[index]) > _ACTION_DEADZONE:
                self.controller.nudge_joint(
                    index, float(action[index]) * step, source=InputSource.KEYBOARD
                )

    def _apply_gripper_action(self, command: float) -> None:
        carried = self.controller.arm.obj.carried
        if command > _GRIPPER_THRESHOLD and not carried:
            self.controller.request_grab_toggle()
        elif command < -_GRIPPER_THRESHOLD and carried:
            self.controller.request_grab_toggle()

    def _placement_distance(self) -> float:
        obj = self._frame.object_world
        return float(np.hypot(obj[0] - self._drop_zone[0], obj[2] - self._drop_zone[2]))

    def _compute_reward(self) -> Tuple[float, bool]:
        """Compute shaped reward and success flag.

        Returns:
            Tuple of (scalar reward, success boolean).
        """
        tip_obj = float(np.linalg.norm(self._frame.pose.wrist_tip_world - self._frame.object_world))
        placement = self._placement_distance()
        reward = -tip_obj - placement
        success = not self._frame.obj.carried and placement < self.cfg.drop_zone_radius
        return reward, success

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Advance the environment by one tick.

        Args:
            action: 5-D array of joint nudges (4) + gripper command (1).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).

        Raises:
            ValueError: If *action* does not have ``action_dim`` entries.
        """
        action = np.asarray(action, dtype=np.float64)
        if action.shape != (self.cfg.action_dim,):
            raise ValueError(
                f"Expected action of shape ({self.cfg.action_dim},), got {action.shape}"
            )
        action = np.clip(action, -1.0, 1.0)
        self._apply_joint_actions(action)
        self._apply_gripper_action(float(action[NUM_JOINTS]))
        self._frame = self.controller.tick()
        self._step_count += 1
        reward, success = self._compute_reward()
        truncated = self._step_count >= self.cfg.episode_length
        if self.render_mode == "human":
            self.render()
        return self._build_observation(), reward, success, truncated, self._build_info(success)

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def _build_observation(self) -> Dict[str, np.ndarray]:
        """Assemble the observation dictionary.

        Returns:
            Dictionary with ``'agent_pos'`` and optionally ``'pixels'``.
        """
        obs: Dict[str, np.ndarray] = {
            "agent_pos": self.controller.arm.get_state().astype(np.float32)
        }
        if "pixels" in self.cfg.obs_type:
            obs["pixels"] = self._renderer.render(self._frame)
        return obs

    def _build_info(self, success: bool) -> Dict[str, Any]:
        return {
            "is_success": success,
            "status": self._frame.status.code.value,
            "tip_height": self._frame.tip_height,
            "carried": self._frame.obj.carried,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def frame(self) -> FrameSnapshot:
        """Snapshot from the most recent reset or step."""
        return self._frame

    def render(self) -> np.ndarray:
        """Render the current scene as an RGB image.

        In ``'human'`` mode the image is also shown in a Pygame window.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        image = self._renderer.render(self._frame)
        if self.render_mode == "human":
            if self._viz is None:
                from robot_arm_sim.visualization.visualizer import SimVisualizer

                self._viz = SimVisualizer(
                    width=self.cfg.observation_width,
                    height=self.cfg.observation_height,
                    fps=self.cfg.fps,
                )
            self._viz.render_frame(image, self._frame)
        return image

    def close(self) -> None:
        if self._viz is not None:
            self._viz.close()
            self._viz = None
