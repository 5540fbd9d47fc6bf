"""
Shared constants and type aliases for the robot_arm_sim package.

Joint indices, the reference arm geometry, the reference joint limits, and
the colour palette used by the renderers all live here so that every other
module reads the same numbers.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple


class JointIndex(IntEnum):
    """Position of each joint inside a joint-angle vector."""

    BASE = 0
    LOWER_ARM = 1
    UPPER_ARM = 2
    WRIST = 3


BASE = JointIndex.BASE
LOWER_ARM = JointIndex.LOWER_ARM
UPPER_ARM = JointIndex.UPPER_ARM
WRIST = JointIndex.WRIST

NUM_JOINTS: int = 4
JOINT_NAMES: Tuple[str, ...] = ("base", "lower", "upper", "wrist")

# Joints whose angle changes the gripper height and therefore pass the floor gate
ARM_JOINTS: Tuple[JointIndex, ...] = (LOWER_ARM, UPPER_ARM)


class LimitState(Enum):
    """Three-level proximity classification used for clamping feedback."""

    NORMAL = "normal"
    NEAR = "near"
    LIMIT = "limit"


# ---------------------------------------------------------------------------
# Reference arm geometry (world units)
# ---------------------------------------------------------------------------
DEFAULT_GROUND_OFFSET: float = -2.0
DEFAULT_BASE_HEIGHT: float = 1.2
DEFAULT_LOWER_ARM_LENGTH: float = 4.5
DEFAULT_UPPER_ARM_LENGTH: float = 4.0
DEFAULT_GRIPPER_TIP_OFFSET: float = 1.8

# ---------------------------------------------------------------------------
# Reference joint limits (degrees)
# ---------------------------------------------------------------------------
DEFAULT_JOINT_LOWER: Tuple[float, ...] = (-180.0, 0.0, 40.0, 0.0)
DEFAULT_JOINT_UPPER: Tuple[float, ...] = (180.0, 90.0, 135.0, 180.0)
DEFAULT_NEAR_THRESHOLD: float = 10.0
DEFAULT_JOINTS: Tuple[float, ...] = (0.0, 25.0, 80.0, 90.0)

# ---------------------------------------------------------------------------
# Floor plane and manipulated cube
# ---------------------------------------------------------------------------
DEFAULT_FLOOR_Y: float = -2.1
DEFAULT_FLOOR_THICKNESS: float = 0.2
DEFAULT_FLOOR_HARD_MARGIN: float = 0.05
DEFAULT_FLOOR_SOFT_MARGIN: float = 0.3
DEFAULT_FLOOR_WARNING_MARGIN: float = 0.7
DEFAULT_OBJECT_SIZE: float = 0.8
DEFAULT_OBJECT_X: float = 5.0
DEFAULT_GRIPPER_GAP: float = 0.2
DEFAULT_GRASP_RADIUS: float = 1.4

# ---------------------------------------------------------------------------
# Motion rates (degrees per tick)
# ---------------------------------------------------------------------------
DEFAULT_AUTOMATION_SPEED: float = 1.5
DEFAULT_NUDGE_STEP: float = 3.0

# ---------------------------------------------------------------------------
# Default rendering dimensions
# ---------------------------------------------------------------------------
DEFAULT_RENDER_WIDTH: int = 480
DEFAULT_RENDER_HEIGHT: int = 320
DEFAULT_FPS: int = 60

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the 2-D renderers
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (230, 230, 242)
COLOR_FLOOR: Tuple[int, int, int] = (133, 115, 102)
COLOR_BASE: Tuple[int, int, int] = (38, 38, 38)
COLOR_ARM: Tuple[int, int, int] = (255, 133, 31)
COLOR_JOINT: Tuple[int, int, int] = (20, 20, 20)
COLOR_GRIPPER: Tuple[int, int, int] = (31, 31, 33)
COLOR_OBJECT: Tuple[int, int, int] = (242, 51, 51)
COLOR_TEXT: Tuple[int, int, int] = (50, 50, 50)
COLOR_NEAR: Tuple[int, int, int] = (255, 193, 7)
COLOR_LIMIT: Tuple[int, int, int] = (220, 53, 69)
COLOR_SUCCESS: Tuple[int, int, int] = (40, 167, 69)
COLOR_AUTO: Tuple[int, int, int] = (40, 80, 167)
