"""Keyboard teleop key mapping."""

from __future__ import annotations

import pytest

from robot_arm_sim.control.status import StatusCode
from robot_arm_sim.teleop.keyboard_teleop import KeyboardTeleop
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, UPPER_ARM, WRIST


@pytest.fixture
def teleop(controller) -> KeyboardTeleop:
    return KeyboardTeleop(controller)


def test_step_defaults_to_config_nudge(teleop, cfg):
    assert teleop.step == cfg.nudge_step


@pytest.mark.parametrize(
    "key,index,expected",
    [
        ("a", BASE, -3.0),
        ("d", BASE, 3.0),
        ("w", LOWER_ARM, 28.0),
        ("s", LOWER_ARM, 22.0),
        ("i", UPPER_ARM, 83.0),
        ("k", UPPER_ARM, 77.0),
        ("j", WRIST, 87.0),
        ("l", WRIST, 93.0),
    ],
)
def test_joint_keys(teleop, key, index, expected):
    assert teleop.handle_key(key)
    assert teleop.controller.arm.joint_positions[index] == expected
    assert teleop.last_update.accepted


def test_keys_are_case_insensitive(teleop):
    teleop.handle_key("D")
    assert teleop.controller.arm.joint_positions[BASE] == 3.0


def test_quit_keys(teleop):
    assert not teleop.handle_key("q")
    assert not teleop.handle_key("escape")


def test_space_toggles_automation_and_locks_joint_keys(teleop):
    teleop.handle_key("space")
    assert teleop.controller.automation.active
    teleop.handle_key("d")
    assert teleop.controller.arm.joint_positions[BASE] == 0.0
    teleop.handle_key(" ")
    assert not teleop.controller.automation.active
    assert teleop.controller.status.code is StatusCode.AUTO_PAUSED


def test_reset_key(teleop, cfg):
    teleop.handle_key("d")
    teleop.handle_key("r")
    assert teleop.controller.arm.joint_positions[BASE] == cfg.default_joints[BASE]
    assert teleop.controller.status.code is StatusCode.RESET


def test_empty_terminal_line_is_enter(teleop):
    assert teleop.process_terminal_input("")
    assert teleop.controller.status.code is StatusCode.TOO_FAR


def test_terminal_line_applies_every_character(teleop):
    assert teleop.process_terminal_input("ddd")
    assert teleop.controller.arm.joint_positions[BASE] == 9.0


def test_terminal_line_stops_at_quit(teleop):
    assert not teleop.process_terminal_input("dqd")
    assert teleop.controller.arm.joint_positions[BASE] == 3.0


def test_unsafe_key_press_is_reported(teleop):
    for _ in range(7):
        teleop.handle_key("w")
    assert teleop.controller.arm.joint_positions[LOWER_ARM] == 46.0
    teleop.handle_key("w")
    assert not teleop.last_update.accepted
    assert teleop.last_update.value == 46.0
