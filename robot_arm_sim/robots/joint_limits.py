"""
Per-joint range clamping and near-limit classification.

Classes:
    JointLimitPolicy: Stateless clamp/classify over a ``JointLimits`` table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from robot_arm_sim.configs import JointLimits, JointRange
from robot_arm_sim.utils.constants import NUM_JOINTS, LimitState
from robot_arm_sim.utils.helpers import clamp


@dataclass(frozen=True)
class JointLimitPolicy:
    """Clamp joint angles to their ranges and classify proximity to a bound.

    Attributes:
        limits: Ranges and near-threshold for all four joints.
    """

    limits: JointLimits = field(default_factory=JointLimits)

    def range_for(self, index: int) -> JointRange:
        """Return the range of joint *index*.

        Raises:
            ValueError: If *index* is not a valid joint index.
        """
        if not 0 <= int(index) < NUM_JOINTS:
            raise ValueError(f"Joint index {index} out of range 0..{NUM_JOINTS - 1}")
        return self.limits.ranges[int(index)]

    def clamp(self, index: int, value: float) -> float:
        """Clamp *value* into the range of joint *index*."""
        rng = self.range_for(index)
        return float(clamp(value, rng.min, rng.max))

    def clamp_all(self, joints: Sequence[float]) -> np.ndarray:
        """Clamp every component of a joint vector."""
        return np.array([self.clamp(i, v) for i, v in enumerate(joints)], dtype=np.float64)

    def classify(self, index: int, value: float) -> LimitState:
        """Classify *value* as normal, near a bound, or at a bound.

        ``LIMIT`` when the value sits on or beyond either bound, ``NEAR``
        when it lies within ``near_threshold`` of one, ``NORMAL`` otherwise.
        """
        rng = self.range_for(index)
        if value <= rng.min or value >= rng.max:
            return LimitState.LIMIT
        threshold = self.limits.near_threshold
        if value <= rng.min + threshold or value >= rng.max - threshold:
            return LimitState.NEAR
        return LimitState.NORMAL
