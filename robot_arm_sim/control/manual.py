"""
Manual joint control from sliders or the keyboard.

Base and wrist requests are clamped and committed unconditionally.  Lower
and upper requests must pass the floor gate against the other arm joint's
current angle; an unsafe request leaves the joint untouched and is
reported back so the input device can snap to the authoritative value.

Manual requests are refused while automation is running.  Any manual
interaction with a paused sequence stops it (step back to 0).

Classes:
    JointRejection: Why a request was refused.
    JointUpdate: Outcome of one manual joint request.
    ManualController: Applies manual requests to a ``SimRobotArm``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from robot_arm_sim.control.automation import AutomationState
from robot_arm_sim.robots.gripper import GrabResult
from robot_arm_sim.robots.sim_robot_arm import SimRobotArm

logger = logging.getLogger(__name__)


class JointRejection(Enum):
    NONE = "none"
    UNSAFE = "unsafe"
    LOCKED = "locked"


@dataclass(frozen=True)
class JointUpdate:
    """Result reported to the input adapter.

    Attributes:
        index: Joint the request targeted.
        accepted: Whether the joint state changed to the (clamped) request.
        value: Authoritative joint angle after the request.
        rejection: Reason for refusal, ``NONE`` when accepted.
    """

    index: int
    accepted: bool
    value: float
    rejection: JointRejection = JointRejection.NONE


@dataclass
class ManualController:
    """Slider/keyboard front door to the arm state.

    Attributes:
        arm: The arm being driven.
        automation: Shared automation state; consulted for the lock and
            stopped on manual interaction.
    """

    arm: SimRobotArm
    automation: AutomationState

    @property
    def controls_enabled(self) -> bool:
        return not self.automation.active

    def set_joint(self, index: int, raw_value: float) -> JointUpdate:
        """Request an absolute angle for joint *index*.

        Out-of-range requests are clamped first; only the clamped angle is
        checked against the floor gate.
        """
        return self._apply(index, float(raw_value), clamp_first=True)

    def nudge(self, index: int, signed_step: float) -> JointUpdate:
        """Request a relative change of *signed_step* degrees."""
        self.arm.limit_policy.range_for(index)
        current = float(self.arm.joint_positions[int(index)])
        return self._apply(index, current + float(signed_step))

    def toggle_grab(self) -> Optional[GrabResult]:
        """Release the object if carried, otherwise attempt a grab.

        Returns:
            The grab result, or None when the object was released or the
            controls are locked.
        """
        if not self.controls_enabled:
            logger.debug("Grab toggle ignored: automation active")
            return None
        self._cancel_paused_automation()
        if self.arm.obj.carried:
            self.arm.release()
            return None
        return self.arm.grab()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply(self, index: int, candidate: float, clamp_first: bool = False) -> JointUpdate:
        self.arm.limit_policy.range_for(index)
        current = float(self.arm.joint_positions[int(index)])
        if not self.controls_enabled:
            logger.debug("Joint %d request ignored: automation active", index)
            return JointUpdate(int(index), False, current, JointRejection.LOCKED)
        self._cancel_paused_automation()
        if not self.arm.propose_joint(index, candidate, clamp_first=clamp_first):
            logger.info("Joint %d request %.2f rejected by floor gate", index, candidate)
            return JointUpdate(int(index), False, current, JointRejection.UNSAFE)
        return JointUpdate(int(index), True, float(self.arm.joint_positions[int(index)]))

    def _cancel_paused_automation(self) -> None:
        if not self.automation.idle:
            logger.info("Manual override: stopping automation at step %d", self.automation.step)
            self.automation.stop()
