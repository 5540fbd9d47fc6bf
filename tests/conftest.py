"""Shared fixtures for the robot_arm_sim test-suite."""

from __future__ import annotations

import pytest

from robot_arm_sim.configs import ArmSimConfig
from robot_arm_sim.control.controller import ArmController
from robot_arm_sim.robots.kinematics import ArmKinematics
from robot_arm_sim.robots.safety import SafetyGate
from robot_arm_sim.robots.sim_robot_arm import SimRobotArm


@pytest.fixture
def cfg() -> ArmSimConfig:
    return ArmSimConfig()


@pytest.fixture
def kinematics(cfg: ArmSimConfig) -> ArmKinematics:
    return ArmKinematics(links=cfg.links)


@pytest.fixture
def gate(cfg: ArmSimConfig, kinematics: ArmKinematics) -> SafetyGate:
    return SafetyGate(kinematics=kinematics, floor=cfg.floor)


@pytest.fixture
def arm(cfg: ArmSimConfig) -> SimRobotArm:
    return SimRobotArm(cfg=cfg)


@pytest.fixture
def controller(cfg: ArmSimConfig) -> ArmController:
    return ArmController(cfg)


def _run_until_idle(controller: ArmController, max_ticks: int = 2000):
    frames = []
    for _ in range(max_ticks):
        if not controller.automation.active:
            break
        frames.append(controller.tick())
    return frames


@pytest.fixture
def run_until_idle():
    """Tick a controller until automation stops; returns the frames produced."""
    return _run_until_idle
