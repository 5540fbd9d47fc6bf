"""
Simulated four-joint pick-and-place arm.

Owns the mutable joint vector and object state together with the stateless
kinematics, joint-limit, safety and grasp components built from a single
``ArmSimConfig``.  Every committed joint change goes through
``propose_joint`` so that the floor check and the commit happen together.

Classes:
    SimRobotArm: Joint/object state plus the components that act on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from robot_arm_sim.configs import ArmSimConfig
from robot_arm_sim.robots.gripper import GrabResult, GraspLogic, ObjectState
from robot_arm_sim.robots.joint_limits import JointLimitPolicy
from robot_arm_sim.robots.kinematics import ArmKinematics, Pose
from robot_arm_sim.robots.safety import SafetyGate
from robot_arm_sim.utils.constants import ARM_JOINTS, LOWER_ARM, UPPER_ARM, LimitState

logger = logging.getLogger(__name__)


@dataclass
class SimRobotArm:
    """A simulated base/lower/upper/wrist arm with one graspable cube.

    Attributes:
        cfg: Geometry, limits and thresholds.
        joint_positions: Current joint angles in degrees (base, lower, upper, wrist).
        obj: The manipulated cube.
    """

    cfg: ArmSimConfig = field(default_factory=ArmSimConfig)
    joint_positions: np.ndarray = field(default_factory=lambda: np.zeros(4))
    obj: ObjectState = field(default_factory=ObjectState)

    def __post_init__(self) -> None:
        self.kinematics = ArmKinematics(
            links=self.cfg.links,
            auto_level=self.cfg.auto_level_gripper,
            apply_tip_offset=self.cfg.apply_tip_offset,
        )
        self.limit_policy = JointLimitPolicy(self.cfg.limits)
        self.safety = SafetyGate(kinematics=self.kinematics, floor=self.cfg.floor)
        self.grasp = GraspLogic(
            grasp_radius=self.cfg.grasp_radius,
            open_gap=self.cfg.open_gripper_gap,
            rest_y=self.cfg.object_rest_y,
        )
        self.reset()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reset(self) -> np.ndarray:
        """Restore default joints and put the cube back at its resting spot.

        Returns:
            A copy of the post-reset joint positions.
        """
        self.joint_positions = self.limit_policy.clamp_all(self.cfg.default_joints)
        self.obj = ObjectState(
            position=self.cfg.default_object_position,
            carried=False,
            gripper_gap=self.cfg.open_gripper_gap,
        )
        return self.joint_positions.copy()

    def is_candidate_safe(self, index: int, value: float) -> bool:
        """Check a candidate angle for an arm joint against the floor gate.

        Base and wrist candidates are always safe.
        """
        if index == LOWER_ARM:
            return self.safety.is_safe(value, self.joint_positions[UPPER_ARM])
        if index == UPPER_ARM:
            return self.safety.is_safe(self.joint_positions[LOWER_ARM], value)
        return True

    def propose_joint(self, index: int, value: float, clamp_first: bool = False) -> bool:
        """Commit *value* to joint *index* if it passes the floor gate.

        By default lower/upper candidates are checked raw and discarded
        unchanged when unsafe; accepted values are clamped to the joint
        range, and the clamped value must pass the gate as well.  With
        *clamp_first* the value is clamped before the check, so only the
        angle actually committed is gated.

        Args:
            index: Joint to update.
            value: Requested angle in degrees.
            clamp_first: Clamp before consulting the gate (absolute requests).

        Returns:
            True if the joint was updated.
        """
        self.limit_policy.range_for(index)
        if clamp_first:
            value = self.limit_policy.clamp(index, value)
        if not self.is_candidate_safe(index, value):
            return False
        clamped = self.limit_policy.clamp(index, value)
        if clamped != value and not self.is_candidate_safe(index, clamped):
            return False
        self.joint_positions[int(index)] = clamped
        return True

    def pose(self) -> Pose:
        return self.kinematics.compute_pose(self.joint_positions)

    def wrist_tip(self) -> np.ndarray:
        return self.pose().wrist_tip_world

    def object_world_position(self, pose: Pose | None = None) -> np.ndarray:
        """Authoritative cube position: held in the gripper or resting."""
        if not self.obj.carried:
            return self.obj.position.copy()
        return self.kinematics.carried_object_position(pose or self.pose())

    def grab(self) -> GrabResult:
        return self.grasp.attempt_grab(self.obj, self.wrist_tip())

    def release(self) -> None:
        self.grasp.release(self.obj, self.wrist_tip())

    def joint_feedback(self) -> List[LimitState]:
        """Per-joint proximity state merged with the floor warning.

        A mechanical ``LIMIT`` always wins.  For the arm joints a non-normal
        floor state is kept, otherwise the mechanical state is used.
        """
        lower, upper = self.joint_positions[LOWER_ARM], self.joint_positions[UPPER_ARM]
        floor_state = self.safety.floor_state(lower, upper)
        feedback = []
        for i, value in enumerate(self.joint_positions):
            mechanical = self.limit_policy.classify(i, value)
            state = floor_state if i in ARM_JOINTS else LimitState.NORMAL
            if mechanical is LimitState.LIMIT or state is LimitState.NORMAL:
                state = mechanical
            feedback.append(state)
        return feedback

    def get_state(self) -> np.ndarray:
        """Return the flat state vector.

        Concatenates joint positions (4), tip xyz (3), object xyz (3), and a
        scalar carried flag (1) into a vector of length 11.

        Returns:
            1-D NumPy array of shape ``(11,)``.
        """
        pose = self.pose()
        carried = np.array([1.0 if self.obj.carried else 0.0])
        return np.concatenate(
            [self.joint_positions, pose.wrist_tip_world, self.object_world_position(pose), carried]
        )
