"""Software renderer and status text tests."""

from __future__ import annotations

import numpy as np
import pytest

from robot_arm_sim.control.status import Status, StatusCode
from robot_arm_sim.utils.constants import (
    COLOR_AUTO,
    COLOR_BACKGROUND,
    COLOR_LIMIT,
    COLOR_OBJECT,
    COLOR_SUCCESS,
    COLOR_TEXT,
)
from robot_arm_sim.visualization.renderer import ArmRenderer
from robot_arm_sim.visualization.status_text import STATUS_MESSAGES, format_status, status_colour


@pytest.fixture
def renderer(cfg) -> ArmRenderer:
    return ArmRenderer.from_config(cfg)


def test_render_shape_and_dtype(renderer, controller):
    image = renderer.render(controller.snapshot())
    assert image.shape == (320, 480, 3)
    assert image.dtype == np.uint8


def test_world_to_pixel(renderer):
    assert renderer.world_to_pixel(np.array([-12.0, 9.0, 0.0])) == (0.0, 0.0)
    assert renderer.world_to_pixel(np.array([0.0, 3.0, 0.0])) == (240.0, 160.0)


def test_cube_drawn_at_rest_position(renderer, controller):
    image = renderer.render(controller.snapshot())
    assert tuple(image[282, 340]) == COLOR_OBJECT
    assert tuple(image[10, 10]) == COLOR_BACKGROUND


def test_render_does_not_mutate_frame(renderer, controller):
    frame = controller.snapshot()
    joints = frame.joints.copy()
    renderer.render(frame)
    np.testing.assert_array_equal(frame.joints, joints)


def test_every_status_code_has_text():
    assert set(STATUS_MESSAGES) == set(StatusCode)


@pytest.mark.parametrize(
    "status,text",
    [
        (Status(StatusCode.TOO_FAR, 2.04), "Too far! Move closer (2.0)"),
        (Status(StatusCode.TASK_COMPLETE), "Task Complete!"),
        (Status(StatusCode.AUTO_GRABBING), "Auto: Grabbing Object..."),
        (Status(StatusCode.OBJECT_PICKED, 0.1), "Object Picked Up!"),
        (Status(StatusCode.AUTO_ABORTED_GRAB_FAILED, 10.08), "Automation Stopped: grab failed (10.1)"),
        (Status(), "Ready"),
    ],
)
def test_format_status(status, text):
    assert format_status(status) == text


def test_status_colour():
    assert status_colour(Status(StatusCode.AUTO_LIFTING)) == COLOR_AUTO
    assert status_colour(Status(StatusCode.AUTO_GRABBING)) == COLOR_AUTO
    assert status_colour(Status(StatusCode.TASK_COMPLETE)) == COLOR_SUCCESS
    assert status_colour(Status(StatusCode.TOO_FAR, 3.0)) == COLOR_LIMIT
    assert status_colour(Status(StatusCode.RESET)) == COLOR_TEXT
