"""Floor safety gate tests."""

from __future__ import annotations

import numpy as np
import pytest

from robot_arm_sim.configs import ArmSimConfig, FloorConfig
from robot_arm_sim.robots.safety import SafetyGate
from robot_arm_sim.robots.sim_robot_arm import SimRobotArm
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, UPPER_ARM, WRIST, LimitState


def test_default_pose_is_safe(gate):
    assert gate.is_safe(25, 80)
    assert gate.tip_height(25, 80) == pytest.approx(0.44311, abs=1e-4)


def test_full_lower_pitch_is_unsafe_from_default(gate):
    assert gate.tip_height(90, 80) == pytest.approx(-6.5392, abs=1e-3)
    assert not gate.is_safe(90, 80)


def test_threshold_is_strict(kinematics):
    height = kinematics.tip_height(30, 105)
    on_limit = SafetyGate(kinematics, FloorConfig(floor_y=height, hard_margin=0.0))
    just_below = SafetyGate(kinematics, FloorConfig(floor_y=height - 1e-6, hard_margin=0.0))
    assert not on_limit.is_safe(30, 105)
    assert just_below.is_safe(30, 105)


def test_hard_limit_uses_floor_plus_margin(gate):
    assert gate.floor.hard_limit_y == pytest.approx(-2.05)


@pytest.mark.parametrize(
    "lower,upper,expected",
    [
        (25, 80, LimitState.NORMAL),
        (30, 105, LimitState.NEAR),
        (30, 112, LimitState.LIMIT),
    ],
)
def test_floor_state(gate, lower, upper, expected):
    assert gate.floor_state(lower, upper) is expected


def test_limit_floor_state_can_still_be_safe(gate):
    assert gate.floor_state(30, 112) is LimitState.LIMIT
    assert gate.is_safe(30, 112)


def test_rejected_lower_request_leaves_joint_unchanged(arm):
    before = arm.joint_positions.copy()
    assert not arm.propose_joint(LOWER_ARM, 90)
    np.testing.assert_array_equal(arm.joint_positions, before)


def test_base_and_wrist_bypass_the_gate():
    # floor far above the arm: every pitch candidate is unsafe
    arm = SimRobotArm(cfg=ArmSimConfig(floor=FloorConfig(floor_y=50.0)))
    assert arm.propose_joint(BASE, 45)
    assert arm.propose_joint(WRIST, 10)
    assert not arm.propose_joint(UPPER_ARM, 81)
    assert not arm.propose_joint(LOWER_ARM, 24)


def test_clamped_value_must_also_be_safe(arm):
    # raw 200 is harmless but it clamps to 135, which puts the tip in the floor
    assert arm.safety.is_safe(25, 200)
    assert not arm.safety.is_safe(25, 135)
    assert not arm.propose_joint(UPPER_ARM, 200)
    assert arm.joint_positions[UPPER_ARM] == 80


def test_repeated_nudges_stop_above_floor(arm):
    accepted = []
    value = arm.joint_positions[LOWER_ARM]
    while arm.propose_joint(LOWER_ARM, value + 3):
        value = arm.joint_positions[LOWER_ARM]
        accepted.append(value)
    assert accepted[-1] == 46
    assert arm.safety.tip_height(46, 80) > arm.cfg.floor.hard_limit_y
    assert arm.safety.tip_height(49, 80) <= arm.cfg.floor.hard_limit_y


def test_lowered_floor_permits_full_lower_pitch():
    arm = SimRobotArm(cfg=ArmSimConfig(floor=FloorConfig(floor_y=-20.0)))
    assert arm.propose_joint(LOWER_ARM, 89)
    assert arm.limit_policy.classify(LOWER_ARM, arm.joint_positions[LOWER_ARM]) is LimitState.NEAR
    assert arm.propose_joint(LOWER_ARM, 95)
    assert arm.joint_positions[LOWER_ARM] == 90
    assert arm.joint_feedback()[LOWER_ARM] is LimitState.LIMIT


def test_more_upright_lower_arm_never_fails_when_a_lower_pose_passes(gate):
    # decreasing the lower-arm angle raises the tip for every upper angle
    for upper in np.arange(40.0, 135.5, 0.5):
        passed_below = False
        for lower in np.arange(90.0, -0.5, -0.5):
            safe = gate.is_safe(lower, upper)
            if passed_below:
                assert safe, (lower, upper)
            passed_below = passed_below or safe


def test_tip_height_decreases_as_lower_arm_tilts(gate):
    for upper in np.arange(40.0, 136.0, 5.0):
        heights = [gate.tip_height(lower, upper) for lower in np.arange(0.0, 91.0, 1.0)]
        assert all(a > b for a, b in zip(heights, heights[1:])), upper
