"""
Forward kinematics for the four-joint pick-and-place arm.

Maps a joint-angle vector (degrees) onto the chain of rigid transforms
base -> lower-arm pivot -> upper-arm pivot -> gripper, and derives the
world-space wrist/fingertip position used for grasping and floor safety.
The chain is recomputed from scratch on every call; nothing is cached.

Classes:
    Pose: Immutable result of one forward-kinematics evaluation.
    ArmKinematics: Evaluates the chain for a given ``LinkDimensions``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from robot_arm_sim.configs import LinkDimensions
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, NUM_JOINTS, UPPER_ARM, WRIST
from robot_arm_sim.utils.helpers import rotate_y, rotate_z, translate, translation_of


@dataclass(frozen=True)
class Pose:
    """World transforms of every stage of the chain.

    Attributes:
        base_xform: World -> base (after base yaw).
        lower_pivot_xform: Frame at the lower-arm pivot, before its pitch.
        lower_xform: Lower-arm frame after its pitch.
        upper_pivot_xform: Frame at the upper-arm pivot, before its pitch.
        upper_xform: Upper-arm frame after its pitch.
        gripper_xform: Frame at the wrist pivot (levelled when enabled).
        wrist_xform: ``gripper_xform`` with the wrist roll applied.
        wrist_tip_world: World position of the wrist tip / fingertip.
    """

    base_xform: np.ndarray
    lower_pivot_xform: np.ndarray
    lower_xform: np.ndarray
    upper_pivot_xform: np.ndarray
    upper_xform: np.ndarray
    gripper_xform: np.ndarray
    wrist_xform: np.ndarray
    wrist_tip_world: np.ndarray

    @property
    def wrist_pivot_world(self) -> np.ndarray:
        """World position of the wrist pivot (translation of ``gripper_xform``)."""
        return translation_of(self.gripper_xform)


@dataclass(frozen=True)
class ArmKinematics:
    """Forward-kinematics evaluator.

    Attributes:
        links: Chain geometry.
        auto_level: Counter-rotate the gripper by ``-(lower + upper)``.
        apply_tip_offset: Shift the reported tip down by the fingertip offset.
    """

    links: LinkDimensions = LinkDimensions()
    auto_level: bool = True
    apply_tip_offset: bool = True

    def compute_pose(self, joints: Sequence[float]) -> Pose:
        """Evaluate the chain for *joints*.

        Translation-then-rotation order at every stage is significant.

        Args:
            joints: ``(base, lower, upper, wrist)`` in degrees. Not modified.

        Returns:
            A ``Pose`` built from fresh matrices.

        Raises:
            ValueError: If *joints* does not hold four angles.
        """
        q = np.asarray(joints, dtype=np.float64)
        if q.shape != (NUM_JOINTS,):
            raise ValueError(f"Expected {NUM_JOINTS} joint angles, got shape {q.shape}")
        lk = self.links

        base = translate(0.0, lk.ground_offset, 0.0) @ rotate_y(q[BASE])
        lower_pivot = base @ translate(0.0, lk.base_height, 0.0)
        lower = lower_pivot @ rotate_z(q[LOWER_ARM])
        upper_pivot = lower @ translate(0.0, lk.lower_arm_length, 0.0)
        upper = upper_pivot @ rotate_z(q[UPPER_ARM])
        gripper = upper @ translate(0.0, lk.upper_arm_length, 0.0)
        if self.auto_level:
            gripper = gripper @ rotate_z(-(q[LOWER_ARM] + q[UPPER_ARM]))
        wrist = gripper @ rotate_y(q[WRIST])

        return Pose(
            base_xform=base,
            lower_pivot_xform=lower_pivot,
            lower_xform=lower,
            upper_pivot_xform=upper_pivot,
            upper_xform=upper,
            gripper_xform=gripper,
            wrist_xform=wrist,
            wrist_tip_world=self._tip_from_gripper(gripper),
        )

    def _tip_from_gripper(self, gripper: np.ndarray) -> np.ndarray:
        tip = translation_of(gripper)
        if self.apply_tip_offset:
            tip[1] -= self.links.gripper_tip_offset
        return tip

    def tip_height(self, lower_deg: float, upper_deg: float) -> float:
        """Closed-form world height of the tip for the two pitch joints.

        Base yaw and wrist roll never change the height, so only the lower and
        upper angles enter the formula.

        Args:
            lower_deg: Lower-arm pitch in degrees.
            upper_deg: Upper-arm pitch in degrees.

        Returns:
            World y coordinate of the tip.
        """
        lk = self.links
        rad_lower = np.radians(lower_deg)
        rad_total = np.radians(lower_deg + upper_deg)
        wrist_y = (
            lk.ground_offset
            + lk.base_height
            + lk.lower_arm_length * np.cos(rad_lower)
            + lk.upper_arm_length * np.cos(rad_total)
        )
        if self.apply_tip_offset:
            wrist_y -= lk.gripper_tip_offset
        return float(wrist_y)

    def carried_object_position(self, pose: Pose) -> np.ndarray:
        """World position of an object held between the fingers.

        Args:
            pose: Current arm pose.

        Returns:
            3-D position one tip offset below the wrist, in the wrist frame.
        """
        held = pose.wrist_xform @ translate(0.0, -self.links.gripper_tip_offset, 0.0)
        return translation_of(held)
