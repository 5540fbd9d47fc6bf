"""
Dataclass configurations for the arm core.

Every numeric threshold the kinematics, safety, grasp and automation code
consults is injected through these objects, so any arm variant is
reproduced by configuration alone.

Classes:
    LinkDimensions: Static link lengths and offsets of the kinematic chain.
    JointRange: ``[min, max]`` bounds of a single joint.
    JointLimits: Per-joint ranges plus the proximity threshold.
    FloorConfig: Floor plane height and its safety margins.
    Waypoints: Hand-authored joint targets of the pick-and-place cycle.
    ArmSimConfig: Aggregate configuration consumed by ``ArmController``.

Functions:
    make_config: Return a named preset configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Tuple

import numpy as np

from robot_arm_sim.utils.constants import (
    DEFAULT_AUTOMATION_SPEED,
    DEFAULT_BASE_HEIGHT,
    DEFAULT_FLOOR_HARD_MARGIN,
    DEFAULT_FLOOR_SOFT_MARGIN,
    DEFAULT_FLOOR_THICKNESS,
    DEFAULT_FLOOR_WARNING_MARGIN,
    DEFAULT_FLOOR_Y,
    DEFAULT_GRASP_RADIUS,
    DEFAULT_GRIPPER_GAP,
    DEFAULT_GRIPPER_TIP_OFFSET,
    DEFAULT_GROUND_OFFSET,
    DEFAULT_JOINT_LOWER,
    DEFAULT_JOINT_UPPER,
    DEFAULT_JOINTS,
    DEFAULT_LOWER_ARM_LENGTH,
    DEFAULT_NEAR_THRESHOLD,
    DEFAULT_NUDGE_STEP,
    DEFAULT_OBJECT_SIZE,
    DEFAULT_OBJECT_X,
    DEFAULT_UPPER_ARM_LENGTH,
    NUM_JOINTS,
)


@dataclass(frozen=True)
class LinkDimensions:
    """Static geometry of the kinematic chain (world units).

    Attributes:
        ground_offset: Height of the base frame above the world origin.
        base_height: Distance from the base frame to the lower-arm pivot.
        lower_arm_length: Lower-arm pivot to upper-arm pivot.
        upper_arm_length: Upper-arm pivot to wrist pivot.
        gripper_tip_offset: Wrist pivot to fingertip, measured straight down.
    """

    ground_offset: float = DEFAULT_GROUND_OFFSET
    base_height: float = DEFAULT_BASE_HEIGHT
    lower_arm_length: float = DEFAULT_LOWER_ARM_LENGTH
    upper_arm_length: float = DEFAULT_UPPER_ARM_LENGTH
    gripper_tip_offset: float = DEFAULT_GRIPPER_TIP_OFFSET


@dataclass(frozen=True)
class JointRange:
    """Closed ``[min, max]`` interval for one joint, in degrees."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Joint range min {self.min} exceeds max {self.max}")


def _default_ranges() -> Tuple[JointRange, ...]:
    return tuple(JointRange(lo, hi) for lo, hi in zip(DEFAULT_JOINT_LOWER, DEFAULT_JOINT_UPPER))


@dataclass(frozen=True)
class JointLimits:
    """Per-joint ranges and the near-limit threshold.

    Attributes:
        ranges: One ``JointRange`` per joint, ordered base, lower, upper, wrist.
        near_threshold: Distance in degrees from a bound that counts as *near*.
    """

    ranges: Tuple[JointRange, ...] = field(default_factory=_default_ranges)
    near_threshold: float = DEFAULT_NEAR_THRESHOLD

    def __post_init__(self) -> None:
        if len(self.ranges) != NUM_JOINTS:
            raise ValueError(f"Expected {NUM_JOINTS} joint ranges, got {len(self.ranges)}")
        if self.near_threshold < 0:
            raise ValueError("near_threshold must be non-negative")


@dataclass(frozen=True)
class FloorConfig:
    """Floor plane height and the margins used for the hard stop and warnings.

    Attributes:
        floor_y: World height of the floor slab centre.
        hard_margin: Tip heights at or below ``floor_y + hard_margin`` are rejected.
        soft_margin: Tip heights at or below ``floor_y + soft_margin`` report *limit*.
        warning_margin: Tip heights at or below ``floor_y + warning_margin`` report *near*.
        thickness: Slab thickness; objects rest on its top face.
    """

    floor_y: float = DEFAULT_FLOOR_Y
    hard_margin: float = DEFAULT_FLOOR_HARD_MARGIN
    soft_margin: float = DEFAULT_FLOOR_SOFT_MARGIN
    warning_margin: float = DEFAULT_FLOOR_WARNING_MARGIN
    thickness: float = DEFAULT_FLOOR_THICKNESS

    @property
    def hard_limit_y(self) -> float:
        return self.floor_y + self.hard_margin

    @property
    def soft_limit_y(self) -> float:
        return self.floor_y + self.soft_margin

    @property
    def warning_y(self) -> float:
        return self.floor_y + self.warning_margin

    @property
    def top_y(self) -> float:
        return self.floor_y + self.thickness / 2


@dataclass(frozen=True)
class Waypoints:
    """Joint targets (degrees) visited by the pick-and-place sequence.

    Arm poses are ``(lower, upper)`` pairs; base targets are single angles.
    """

    align_base: float = -180.0
    reach: Tuple[float, float] = (30.0, 105.0)
    lift: Tuple[float, float] = (10.0, 90.0)
    drop_base: float = 5.0
    place: Tuple[float, float] = (35.0, 95.0)


@dataclass
class ArmSimConfig:
    """Aggregate configuration for the arm core.

    Attributes:
        name: Preset identifier, informational only.
        links: Kinematic chain geometry.
        limits: Joint ranges and proximity threshold.
        floor: Floor plane and safety margins.
        waypoints: Automation targets.
        auto_level_gripper: Counter-rotate the gripper so it always faces down.
        apply_tip_offset: Report the fingertip rather than the wrist pivot.
        grasp_radius: Maximum tip-to-object distance for a successful grab.
        automation_speed: Automation joint speed in degrees per tick.
        nudge_step: Default manual nudge size in degrees.
        default_joints: Joint vector restored on reset.
        object_size: Edge length of the manipulated cube.
        object_x: Resting x coordinate of the cube after reset.
        open_gripper_gap: Finger gap when the gripper is open.
    """

    name: str = "classic"
    links: LinkDimensions = field(default_factory=LinkDimensions)
    limits: JointLimits = field(default_factory=JointLimits)
    floor: FloorConfig = field(default_factory=FloorConfig)
    waypoints: Waypoints = field(default_factory=Waypoints)
    auto_level_gripper: bool = True
    apply_tip_offset: bool = True
    grasp_radius: float = DEFAULT_GRASP_RADIUS
    automation_speed: float = DEFAULT_AUTOMATION_SPEED
    nudge_step: float = DEFAULT_NUDGE_STEP
    default_joints: Tuple[float, ...] = DEFAULT_JOINTS
    object_size: float = DEFAULT_OBJECT_SIZE
    object_x: float = DEFAULT_OBJECT_X
    open_gripper_gap: float = DEFAULT_GRIPPER_GAP

    def __post_init__(self) -> None:
        """Reject configurations the core cannot operate with."""
        if self.grasp_radius <= 0:
            raise ValueError("grasp_radius must be positive")
        if self.automation_speed <= 0:
            raise ValueError("automation_speed must be positive")
        if self.nudge_step <= 0:
            raise ValueError("nudge_step must be positive")
        if len(self.default_joints) != NUM_JOINTS:
            raise ValueError(f"default_joints must have {NUM_JOINTS} entries")

    @property
    def object_rest_y(self) -> float:
        """Height of the cube centre when it rests on the floor."""
        return self.floor.top_y + self.object_size / 2

    @property
    def default_object_position(self) -> np.ndarray:
        """Resting cube position restored on reset."""
        return np.array([self.object_x, self.object_rest_y, 0.0], dtype=np.float64)


# ---------------------------------------------------------------------------
# Presets (name -> config constructor)
# ---------------------------------------------------------------------------
def _classic() -> ArmSimConfig:
    return ArmSimConfig()


def _free_wrist() -> ArmSimConfig:
    return replace(ArmSimConfig(), name="free_wrist", auto_level_gripper=False, grasp_radius=4.5)


_PRESETS: Dict[str, Callable[[], ArmSimConfig]] = {
    "classic": _classic,
    "free_wrist": _free_wrist,
}


def preset_names() -> Tuple[str, ...]:
    """Return the registered preset names."""
    return tuple(_PRESETS)


def make_config(name: str = "classic") -> ArmSimConfig:
    """Return a fresh configuration for a named preset.

    Args:
        name: One of ``preset_names()``.

    Returns:
        A new ``ArmSimConfig`` instance.

    Raises:
        ValueError: If *name* is not a registered preset.
    """
    if name not in _PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Choose from {list(_PRESETS)}")
    return _PRESETS[name]()
