"""
Floor-collision safety gate.

The gate is the single authority consulted before any committed change to
the lower-arm or upper-arm angle.  A candidate that would put the gripper
tip at or below the hard floor limit is rejected outright; it is never
clamped to the boundary.

Classes:
    SafetyGate: Accept/reject pitch candidates and report floor proximity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from robot_arm_sim.configs import FloorConfig
from robot_arm_sim.robots.kinematics import ArmKinematics
from robot_arm_sim.utils.constants import LimitState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SafetyGate:
    """Floor-height check for lower/upper joint candidates.

    Attributes:
        kinematics: Evaluator providing the tip-height formula.
        floor: Floor height and margins.
    """

    kinematics: ArmKinematics = field(default_factory=ArmKinematics)
    floor: FloorConfig = field(default_factory=FloorConfig)

    def tip_height(self, lower_deg: float, upper_deg: float) -> float:
        return self.kinematics.tip_height(lower_deg, upper_deg)

    def is_safe(self, lower_deg: float, upper_deg: float) -> bool:
        """Return True iff the tip stays strictly above the hard floor limit.

        Args:
            lower_deg: Candidate lower-arm angle.
            upper_deg: Candidate upper-arm angle.

        Returns:
            Whether the candidate pair may be committed.
        """
        height = self.tip_height(lower_deg, upper_deg)
        safe = height > self.floor.hard_limit_y
        if not safe:
            logger.debug(
                "Rejected lower=%.2f upper=%.2f: tip y %.3f <= %.3f",
                lower_deg,
                upper_deg,
                height,
                self.floor.hard_limit_y,
            )
        return safe

    def floor_state(self, lower_deg: float, upper_deg: float) -> LimitState:
        """Classify how close the tip is to the floor for visual feedback.

        Returns:
            ``LIMIT`` at or below the soft margin, ``NEAR`` at or below the
            warning margin, ``NORMAL`` above it.
        """
        height = self.tip_height(lower_deg, upper_deg)
        if height <= self.floor.soft_limit_y:
            return LimitState.LIMIT
        if height <= self.floor.warning_y:
            return LimitState.NEAR
        return LimitState.NORMAL
