"""
Small stateless helpers used across the robot_arm_sim package.

Provides numerical clamping, homogeneous 4x4 transform builders (column
vector convention, angles in degrees), and point/distance helpers.
"""

from __future__ import annotations

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def translate(x: float, y: float, z: float) -> np.ndarray:
    """Return a 4x4 homogeneous translation matrix.

    Args:
        x: Offset along the world x axis.
        y: Offset along the world y axis.
        z: Offset along the world z axis.

    Returns:
        ``(4, 4)`` float64 matrix.
    """
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


def rotate_y(degrees: float) -> np.ndarray:
    """Return a 4x4 rotation about the y (vertical) axis.

    Args:
        degrees: Counter-clockwise angle seen from +y.

    Returns:
        ``(4, 4)`` float64 matrix.
    """
    rad = np.radians(degrees)
    c, s = np.cos(rad), np.sin(rad)
    m = np.eye(4)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotate_z(degrees: float) -> np.ndarray:
    """Return a 4x4 rotation about the z axis.

    Args:
        degrees: Counter-clockwise angle seen from +z.

    Returns:
        ``(4, 4)`` float64 matrix.
    """
    rad = np.radians(degrees)
    c, s = np.cos(rad), np.sin(rad)
    m = np.eye(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def translation_of(xform: np.ndarray) -> np.ndarray:
    """Return the translation column of a homogeneous transform as a 3-vector."""
    return np.array(xform[:3, 3], dtype=np.float64)


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Return the Euclidean distance between two 3-D points."""
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))
