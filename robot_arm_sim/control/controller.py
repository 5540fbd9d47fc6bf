"""
Single owner of the mutable arm state.

``ArmController`` holds the joint vector, the object state and the
automation state, and exposes the synchronous surface used by input
adapters (sliders, keyboard, Gymnasium actions).  Once per rendered frame
the host calls ``tick`` and receives a read-only ``FrameSnapshot`` for the
render adapter.  All calls run on one logical thread; hosts that add threads
must serialise calls into the controller.

Classes:
    InputSource: Which kind of device issued a manual request.
    FrameSnapshot: Per-tick copy of everything the renderer needs.
    ArmController: Facade over arm, manual control and automation.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from robot_arm_sim.configs import ArmSimConfig
from robot_arm_sim.control.automation import STEP_STATUS, AutomationSequencer, AutomationState
from robot_arm_sim.control.manual import JointUpdate, ManualController
from robot_arm_sim.control.status import Status, StatusCode
from robot_arm_sim.robots.gripper import ObjectState
from robot_arm_sim.robots.kinematics import Pose
from robot_arm_sim.robots.sim_robot_arm import SimRobotArm
from robot_arm_sim.utils.constants import LOWER_ARM, UPPER_ARM, LimitState

logger = logging.getLogger(__name__)


class InputSource(Enum):
    SLIDER = "slider"
    KEYBOARD = "keyboard"


_SOURCE_STATUS = {
    InputSource.SLIDER: StatusCode.MANUAL_SLIDER,
    InputSource.KEYBOARD: StatusCode.MANUAL_KEYBOARD,
}


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything the render adapter consumes for one frame.

    All arrays and the object state are copies; mutating them has no effect
    on the controller.
    """

    tick: int
    joints: np.ndarray
    pose: Pose
    obj: ObjectState
    object_world: np.ndarray
    feedback: Tuple[LimitState, ...]
    status: Status
    automation: AutomationState
    controls_enabled: bool
    tip_height: float


class ArmController:
    """Facade owning the arm state and routing every request.

    Args:
        cfg: Arm configuration; the ``classic`` defaults when None.
    """

    def __init__(self, cfg: Optional[ArmSimConfig] = None) -> None:
        self.cfg = cfg or ArmSimConfig()
        self.arm = SimRobotArm(cfg=self.cfg)
        self.automation = AutomationState(speed_deg_per_tick=self.cfg.automation_speed)
        self.sequencer = AutomationSequencer(arm=self.arm, waypoints=self.cfg.waypoints)
        self.manual = ManualController(arm=self.arm, automation=self.automation)
        self.status = Status(StatusCode.READY)
        self._tick_count = 0

    # ------------------------------------------------------------------
    # Input adapter surface
    # ------------------------------------------------------------------

    def set_joint_absolute(
        self, index: int, degrees: float, source: InputSource = InputSource.SLIDER
    ) -> JointUpdate:
        """Set a joint to an absolute angle; see ``ManualController.set_joint``."""
        update = self.manual.set_joint(index, degrees)
        self._note_manual(source)
        return update

    def nudge_joint(
        self, index: int, signed_degrees: float, source: InputSource = InputSource.KEYBOARD
    ) -> JointUpdate:
        """Move a joint by a signed delta; see ``ManualController.nudge``."""
        update = self.manual.nudge(index, signed_degrees)
        self._note_manual(source)
        return update

    def request_grab_toggle(self) -> bool:
        """Release the object if carried, otherwise try to grab it.

        Returns:
            True if the object was picked up or dropped, False if the grab was
            out of reach or the controls are locked.
        """
        if not self.manual.controls_enabled:
            return False
        was_carried = self.arm.obj.carried
        result = self.manual.toggle_grab()
        if was_carried:
            self.status = Status(StatusCode.OBJECT_DROPPED)
            return True
        if result.success:
            self.status = Status(StatusCode.OBJECT_PICKED, result.distance)
        else:
            self.status = Status(StatusCode.TOO_FAR, result.distance)
        return result.success

    def request_automation_toggle(self) -> bool:
        """Start/resume automation when inactive, pause it when active.

        Returns:
            The new ``active`` flag.
        """
        if self.automation.active:
            self.automation.pause()
            self.status = Status(StatusCode.AUTO_PAUSED)
            logger.info("Automation paused at step %d", self.automation.step)
        else:
            self.automation.start()
            self.status = Status(self._step_code())
            logger.info("Automation started at step %d", self.automation.step)
        return self.automation.active

    def stop_automation(self) -> None:
        """Stop automation and return the sequence to idle."""
        self.automation.stop()
        self.status = Status(StatusCode.READY)

    def request_reset(self) -> None:
        """Stop automation and restore default joints and object."""
        self.automation.stop()
        self.arm.reset()
        self.status = Status(StatusCode.RESET)
        logger.info("System reset")

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def tick(self) -> FrameSnapshot:
        """Advance automation by one step and return the frame snapshot."""
        status = self.sequencer.tick(self.automation)
        if status is not None:
            self.status = status
        self._tick_count += 1
        return self.snapshot()

    def snapshot(self) -> FrameSnapshot:
        """Return a read-only copy of the current state without advancing."""
        pose = self.arm.pose()
        joints = self.arm.joint_positions
        return FrameSnapshot(
            tick=self._tick_count,
            joints=joints.copy(),
            pose=pose,
            obj=self.arm.obj.copy(),
            object_world=self.arm.object_world_position(pose),
            feedback=tuple(self.arm.joint_feedback()),
            status=self.status,
            automation=copy.copy(self.automation),
            controls_enabled=self.manual.controls_enabled,
            tip_height=self.arm.safety.tip_height(joints[LOWER_ARM], joints[UPPER_ARM]),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _note_manual(self, source: InputSource) -> None:
        if self.manual.controls_enabled:
            self.status = Status(_SOURCE_STATUS[source])

    def _step_code(self) -> StatusCode:
        return STEP_STATUS.get(self.automation.step, StatusCode.READY)
