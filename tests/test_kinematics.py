"""Forward-kinematics chain tests."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from robot_arm_sim.configs import LinkDimensions
from robot_arm_sim.robots.kinematics import ArmKinematics
from robot_arm_sim.utils.helpers import rotate_y, rotate_z, translation_of


def test_upright_arm_stacks_links_vertically(kinematics):
    pose = kinematics.compute_pose([0, 0, 0, 0])
    np.testing.assert_allclose(translation_of(pose.base_xform), [0, -2.0, 0], atol=1e-12)
    np.testing.assert_allclose(translation_of(pose.lower_pivot_xform), [0, -0.8, 0], atol=1e-12)
    np.testing.assert_allclose(translation_of(pose.upper_pivot_xform), [0, 3.7, 0], atol=1e-12)
    np.testing.assert_allclose(pose.wrist_pivot_world, [0, 7.7, 0], atol=1e-12)
    np.testing.assert_allclose(pose.wrist_tip_world, [0, 5.9, 0], atol=1e-12)


def test_lower_pitch_rotates_chain_toward_negative_x(kinematics):
    pose = kinematics.compute_pose([0, 90, 0, 0])
    np.testing.assert_allclose(translation_of(pose.upper_pivot_xform), [-4.5, -0.8, 0], atol=1e-9)
    np.testing.assert_allclose(pose.wrist_pivot_world, [-8.5, -0.8, 0], atol=1e-9)


def test_base_yaw_swings_arm_around_vertical_axis(kinematics):
    pose = kinematics.compute_pose([90, 90, 0, 0])
    np.testing.assert_allclose(pose.wrist_pivot_world, [0, -0.8, 8.5], atol=1e-9)


def test_default_pose_tip(kinematics):
    tip = kinematics.compute_pose([0, 25, 80, 90]).wrist_tip_world
    np.testing.assert_allclose(tip, [-5.76548, 0.44311, 0.0], atol=1e-4)


def test_tip_height_formula_matches_chain(kinematics):
    for base, lower, upper, wrist in itertools.product(
        (-180, -35, 0, 120), (0, 25, 60, 90), (40, 80, 105, 135), (0, 90)
    ):
        pose = kinematics.compute_pose([base, lower, upper, wrist])
        assert kinematics.tip_height(lower, upper) == pytest.approx(pose.wrist_tip_world[1])


def test_base_and_wrist_do_not_change_height(kinematics):
    heights = {
        round(kinematics.compute_pose([b, 30, 100, w]).wrist_tip_world[1], 9)
        for b in (-180, -90, 0, 45, 180)
        for w in (0, 45, 180)
    }
    assert len(heights) == 1


def test_auto_level_keeps_gripper_facing_down(kinematics):
    pose = kinematics.compute_pose([30, 40, 95, 0])
    np.testing.assert_allclose(pose.gripper_xform[:3, :3], rotate_y(30)[:3, :3], atol=1e-12)


def test_without_auto_level_gripper_follows_arm_tilt():
    kin = ArmKinematics(auto_level=False)
    pose = kin.compute_pose([30, 40, 95, 0])
    expected = (rotate_y(30) @ rotate_z(135))[:3, :3]
    np.testing.assert_allclose(pose.gripper_xform[:3, :3], expected, atol=1e-12)


def test_leveling_does_not_move_the_wrist_pivot():
    joints = [-60, 35, 95, 10]
    levelled = ArmKinematics(auto_level=True).compute_pose(joints)
    free = ArmKinematics(auto_level=False).compute_pose(joints)
    np.testing.assert_allclose(levelled.wrist_tip_world, free.wrist_tip_world, atol=1e-12)


def test_tip_offset_can_be_disabled():
    kin = ArmKinematics(apply_tip_offset=False)
    pose = kin.compute_pose([0, 25, 80, 90])
    np.testing.assert_allclose(pose.wrist_tip_world, pose.wrist_pivot_world)
    assert kin.tip_height(25, 80) == pytest.approx(pose.wrist_pivot_world[1])


def test_custom_link_dimensions():
    kin = ArmKinematics(
        links=LinkDimensions(
            ground_offset=0.0,
            base_height=1.0,
            lower_arm_length=2.0,
            upper_arm_length=3.0,
            gripper_tip_offset=0.5,
        )
    )
    assert kin.compute_pose([0, 0, 0, 0]).wrist_tip_world[1] == pytest.approx(5.5)


def test_compute_pose_leaves_input_untouched(kinematics):
    joints = np.array([10.0, 20.0, 90.0, 45.0])
    before = joints.copy()
    kinematics.compute_pose(joints)
    np.testing.assert_array_equal(joints, before)


def test_compute_pose_is_deterministic(kinematics):
    a = kinematics.compute_pose([12, 34, 56, 78])
    b = kinematics.compute_pose([12, 34, 56, 78])
    np.testing.assert_array_equal(a.gripper_xform, b.gripper_xform)
    assert a.gripper_xform is not b.gripper_xform


def test_compute_pose_rejects_wrong_length(kinematics):
    with pytest.raises(ValueError):
        kinematics.compute_pose([0, 0, 0])


def test_carried_object_sits_at_tip_when_levelled(kinematics):
    pose = kinematics.compute_pose([-120, 30, 105, 60])
    np.testing.assert_allclose(
        kinematics.carried_object_position(pose), pose.wrist_tip_world, atol=1e-9
    )
