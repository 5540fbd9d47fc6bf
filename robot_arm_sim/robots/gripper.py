"""
Carried-object state and the grab/release rules.

Grabbing requires the tip to be within the configured grasp radius of the
object; releasing always succeeds and drops the object straight down onto
the floor below the tip.

Classes:
    ObjectState: Position, carried flag and finger gap of the single cube.
    GrabResult: Outcome of a grab attempt.
    GraspLogic: Applies the grab/release rules to an ``ObjectState``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from robot_arm_sim.utils.constants import DEFAULT_GRASP_RADIUS, DEFAULT_GRIPPER_GAP
from robot_arm_sim.utils.helpers import distance

logger = logging.getLogger(__name__)


@dataclass
class ObjectState:
    """The manipulated cube.

    While ``carried`` is True, ``position`` is stale; the authoritative
    location is derived from the gripper transform every frame.

    Attributes:
        position: Resting world position [x, y, z].
        carried: Whether the cube is held by the gripper.
        gripper_gap: Current finger gap (0 when closed).
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    carried: bool = False
    gripper_gap: float = DEFAULT_GRIPPER_GAP

    def copy(self) -> "ObjectState":
        return copy.deepcopy(self)


@dataclass(frozen=True)
class GrabResult:
    """Result of ``GraspLogic.attempt_grab``.

    Attributes:
        success: Whether the object is now carried.
        distance: Tip-to-object distance measured for the attempt.
    """

    success: bool
    distance: float


@dataclass(frozen=True)
class GraspLogic:
    """Proximity-gated grab and unconditional release.

    Attributes:
        grasp_radius: Grab succeeds iff the distance is strictly smaller.
        open_gap: Finger gap restored on release.
        rest_y: Height of the object centre when resting on the floor.
    """

    grasp_radius: float = DEFAULT_GRASP_RADIUS
    open_gap: float = DEFAULT_GRIPPER_GAP
    rest_y: float = 0.0

    def attempt_grab(self, obj: ObjectState, wrist_tip: Sequence[float]) -> GrabResult:
        """Try to pick up *obj* with the tip at *wrist_tip*.

        On success the object becomes carried and the gripper closes; on
        failure nothing changes.

        Args:
            obj: Object state, mutated only on success.
            wrist_tip: World position of the gripper tip.

        Returns:
            ``GrabResult`` with the measured distance.
        """
        dist = distance(wrist_tip, obj.position)
        if dist < self.grasp_radius:
            obj.carried = True
            obj.gripper_gap = 0.0
            logger.info("Grabbed object at distance %.2f", dist)
            return GrabResult(success=True, distance=dist)
        logger.info("Grab failed: distance %.2f >= radius %.2f", dist, self.grasp_radius)
        return GrabResult(success=False, distance=dist)

    def release(self, obj: ObjectState, wrist_tip: Sequence[float]) -> None:
        """Drop *obj* onto the floor directly below *wrist_tip*."""
        tip = np.asarray(wrist_tip, dtype=np.float64)
        obj.carried = False
        obj.gripper_gap = self.open_gap
        obj.position = np.array([tip[0], self.rest_y, tip[2]], dtype=np.float64)
        logger.info("Released object at (%.2f, %.2f, %.2f)", *obj.position)
