"""
Shared constants, type aliases, and helper utilities.

Centralizes joint indices, reference geometry, colour palettes, and small
stateless transform helpers used across the robot_arm_sim package.
"""
