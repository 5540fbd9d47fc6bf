"""Manual slider/keyboard control tests."""

from __future__ import annotations

import numpy as np
import pytest

from robot_arm_sim.control.automation import AutomationState
from robot_arm_sim.control.manual import JointRejection, ManualController
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, UPPER_ARM, WRIST


@pytest.fixture
def manual(arm) -> ManualController:
    return ManualController(arm=arm, automation=AutomationState())


def test_base_and_wrist_are_clamped_and_committed(manual):
    update = manual.set_joint(BASE, 400)
    assert update.accepted
    assert update.value == 180
    update = manual.set_joint(WRIST, -10)
    assert update.accepted
    assert update.value == 0


def test_out_of_range_safe_pitch_is_clamped(manual):
    update = manual.set_joint(LOWER_ARM, -20)
    assert update.accepted
    assert update.value == 0


def test_unsafe_request_reports_authoritative_value(manual):
    update = manual.set_joint(LOWER_ARM, 90)
    assert not update.accepted
    assert update.rejection is JointRejection.UNSAFE
    assert update.value == 25


def test_upper_checked_against_current_lower(manual):
    manual.set_joint(LOWER_ARM, 0)
    assert manual.set_joint(UPPER_ARM, 135).accepted
    manual.set_joint(UPPER_ARM, 80)
    manual.set_joint(LOWER_ARM, 40)
    assert not manual.set_joint(UPPER_ARM, 135).accepted


def test_nudge_is_relative(manual):
    update = manual.nudge(WRIST, -5)
    assert update.accepted
    assert update.value == 85
    update = manual.nudge(BASE, -200)
    assert update.value == -180


def test_nudge_rejected_near_floor(manual):
    manual.set_joint(LOWER_ARM, 46)
    update = manual.nudge(LOWER_ARM, 3)
    assert not update.accepted
    assert update.value == 46


def test_requests_locked_while_automation_runs(arm):
    automation = AutomationState()
    automation.start()
    manual = ManualController(arm=arm, automation=automation)
    before = arm.joint_positions.copy()

    update = manual.set_joint(BASE, 45)
    assert update.rejection is JointRejection.LOCKED
    assert manual.toggle_grab() is None
    np.testing.assert_array_equal(arm.joint_positions, before)
    assert automation.active
    assert automation.step == 1


def test_interaction_stops_paused_automation(arm):
    automation = AutomationState(active=False, step=4)
    manual = ManualController(arm=arm, automation=automation)
    manual.set_joint(WRIST, 30)
    assert automation.step == 0


def test_rejected_request_still_stops_paused_automation(arm):
    automation = AutomationState(active=False, step=2)
    manual = ManualController(arm=arm, automation=automation)
    assert not manual.set_joint(LOWER_ARM, 90).accepted
    assert automation.step == 0


def test_toggle_grab(manual):
    manual.set_joint(BASE, -180)
    manual.set_joint(LOWER_ARM, 30)
    manual.set_joint(UPPER_ARM, 105)
    result = manual.toggle_grab()
    assert result.success
    assert manual.arm.obj.carried
    assert manual.toggle_grab() is None
    assert not manual.arm.obj.carried


def test_invalid_joint_index(manual):
    with pytest.raises(ValueError):
        manual.set_joint(7, 0)
    with pytest.raises(ValueError):
        manual.nudge(-1, 3)


def test_absolute_request_is_clamped_before_the_floor_check(manual):
    # raw -180 would put the tip underground, the clamped 0 is upright
    assert manual.arm.safety.is_safe(0, 80)
    update = manual.set_joint(LOWER_ARM, -180)
    assert update.accepted
    assert update.rejection is JointRejection.NONE
    assert update.value == 0


def test_absolute_request_rejected_when_clamped_value_is_unsafe(manual):
    update = manual.set_joint(UPPER_ARM, 200)
    assert not update.accepted
    assert update.rejection is JointRejection.UNSAFE
    assert update.value == 80


def test_nudge_checks_the_raw_target(manual):
    update = manual.nudge(LOWER_ARM, -200)
    assert not update.accepted
    assert update.rejection is JointRejection.UNSAFE
    assert update.value == 25
