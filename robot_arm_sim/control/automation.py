"""
Fixed-step pick-and-place automation.

A seven-step state machine advanced once per tick while active:

    1 align base -> 2 reach -> 3 grab -> 4 lift -> 5 swing to drop zone
    -> 6 lower to place pose -> 7 release, then back to idle (step 0).

Joints move at a fixed angular speed and snap onto a target once the
remaining delta is smaller than one step.  Every lower/upper move goes
through the arm's floor gate; a rejected move simply stalls that joint for
the tick.  Losing the object during steps 4-6 aborts the run.

Classes:
    AutomationState: ``active`` flag, current step and speed.
    AutomationSequencer: Executes one tick of the state machine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from robot_arm_sim.configs import Waypoints
from robot_arm_sim.control.status import Status, StatusCode
from robot_arm_sim.robots.sim_robot_arm import SimRobotArm
from robot_arm_sim.utils.constants import BASE, DEFAULT_AUTOMATION_SPEED, LOWER_ARM, UPPER_ARM

logger = logging.getLogger(__name__)

IDLE_STEP = 0
GRAB_STEP = 3
RELEASE_STEP = 7
CARRY_STEPS = (4, 5, 6)

# step -> step entered once the step's exit condition holds
NEXT_STEP: Dict[int, int] = {1: 2, 2: 3, 3: 4, 4: 5, 5: 6, 6: 7, 7: IDLE_STEP}

STEP_STATUS: Dict[int, StatusCode] = {
    1: StatusCode.AUTO_ALIGNING,
    2: StatusCode.AUTO_REACHING,
    3: StatusCode.AUTO_GRABBING,
    4: StatusCode.AUTO_LIFTING,
    5: StatusCode.AUTO_MOVING_TO_DROP,
    6: StatusCode.AUTO_POSITIONING,
    7: StatusCode.AUTO_RELEASING,
}


@dataclass
class AutomationState:
    """Run state of the sequencer.

    Attributes:
        active: Whether ticks advance the sequence.
        step: 0 when idle, 1-7 for the pick-and-place steps.
        speed_deg_per_tick: Joint speed used for waypoint motion.
    """

    active: bool = False
    step: int = IDLE_STEP
    speed_deg_per_tick: float = DEFAULT_AUTOMATION_SPEED

    def start(self) -> None:
        """Activate, beginning at step 1 unless resuming a paused run."""
        self.active = True
        if self.step == IDLE_STEP:
            self.step = 1

    def pause(self) -> None:
        """Deactivate but keep the current step for a later resume."""
        self.active = False

    def stop(self) -> None:
        """Deactivate and return to idle."""
        self.active = False
        self.step = IDLE_STEP

    @property
    def idle(self) -> bool:
        return self.step == IDLE_STEP


@dataclass
class AutomationSequencer:
    """Drives a ``SimRobotArm`` through the waypoint sequence.

    Attributes:
        arm: The arm whose joints and object are driven.
        waypoints: Joint targets for every motion step.
    """

    arm: SimRobotArm
    waypoints: Waypoints = Waypoints()

    def targets_for(self, step: int) -> Dict[int, float]:
        """Return ``{joint_index: target}`` for a motion step, empty otherwise."""
        wp = self.waypoints
        table = {
            1: {BASE: wp.align_base},
            2: {LOWER_ARM: wp.reach[0], UPPER_ARM: wp.reach[1]},
            4: {LOWER_ARM: wp.lift[0], UPPER_ARM: wp.lift[1]},
            5: {BASE: wp.drop_base},
            6: {LOWER_ARM: wp.place[0], UPPER_ARM: wp.place[1]},
        }
        return table.get(step, {})

    def move_toward(self, index: int, target: float, speed: float) -> bool:
        """Move one joint a single step toward *target*.

        Args:
            index: Joint to move.
            target: Target angle in degrees.
            speed: Maximum change this tick.

        Returns:
            True once the joint sits exactly on *target*.
        """
        current = float(self.arm.joint_positions[index])
        if abs(current - target) < speed:
            candidate, arrived = target, True
        else:
            candidate = current + (speed if current < target else -speed)
            arrived = False
        if not self.arm.propose_joint(index, candidate):
            return False
        return arrived

    def tick(self, state: AutomationState) -> Optional[Status]:
        """Advance the sequence by one tick.

        Args:
            state: Automation state, mutated in place.

        Returns:
            The status for this tick, or None when automation is inactive.
        """
        if not state.active:
            return None

        if state.step in CARRY_STEPS and not self.arm.obj.carried:
            logger.warning("Object lost during step %d, aborting automation", state.step)
            state.stop()
            return Status(StatusCode.AUTO_ABORTED_OBJECT_LOST)

        if state.step == GRAB_STEP:
            return self._grab_step(state)
        if state.step == RELEASE_STEP:
            self.arm.release()
            state.stop()
            logger.info("Pick-and-place cycle complete")
            return Status(StatusCode.TASK_COMPLETE)

        targets = self.targets_for(state.step)
        if not targets:
            logger.warning("No waypoint for step %d, stopping automation", state.step)
            state.stop()
            return Status(StatusCode.READY)

        status = Status(STEP_STATUS[state.step])
        reached = [self.move_toward(j, t, state.speed_deg_per_tick) for j, t in targets.items()]
        if all(reached):
            self._advance(state)
        return status

    def _grab_step(self, state: AutomationState) -> Status:
        if self.arm.obj.carried:
            self._advance(state)
            return Status(StatusCode.OBJECT_PICKED, 0.0)
        result = self.arm.grab()
        if result.success:
            self._advance(state)
            return Status(StatusCode.OBJECT_PICKED, result.distance)
        logger.warning("Automation grab failed at distance %.2f", result.distance)
        state.stop()
        return Status(StatusCode.AUTO_ABORTED_GRAB_FAILED, result.distance)

    @staticmethod
    def _advance(state: AutomationState) -> None:
        nxt = NEXT_STEP[state.step]
        logger.info("Automation step %d -> %d", state.step, nxt)
        state.step = nxt
