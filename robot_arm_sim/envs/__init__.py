"""
Gymnasium-compatible simulation environments.

Provides the PickPlaceArm task, which drives the four-joint arm core through
joint nudges and gripper commands.
"""

from robot_arm_sim.envs.configs import PickPlaceArmConfig
from robot_arm_sim.envs.factory import make_sim_env
from robot_arm_sim.envs.pick_place import PickPlaceArmEnv

__all__ = [
    "PickPlaceArmEnv",
    "PickPlaceArmConfig",
    "make_sim_env",
]
