"""
Side-view software renderer for the arm.

Projects the world x/y plane onto an RGB NumPy canvas: floor slab, base,
both arm links, the gripper fingers and the cube.  Joint pivots are tinted
with their proximity feedback (yellow near a bound, red at a bound).

Classes:
    ArmRenderer: Draws a ``FrameSnapshot`` into an (H, W, 3) uint8 array.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from robot_arm_sim.configs import ArmSimConfig
from robot_arm_sim.control.controller import FrameSnapshot
from robot_arm_sim.utils.constants import (
    COLOR_ARM,
    COLOR_BACKGROUND,
    COLOR_BASE,
    COLOR_FLOOR,
    COLOR_GRIPPER,
    COLOR_JOINT,
    COLOR_LIMIT,
    COLOR_NEAR,
    COLOR_OBJECT,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    LOWER_ARM,
    UPPER_ARM,
    LimitState,
)
from robot_arm_sim.utils.helpers import translate, translation_of

_FEEDBACK_COLORS = {
    LimitState.NORMAL: COLOR_JOINT,
    LimitState.NEAR: COLOR_NEAR,
    LimitState.LIMIT: COLOR_LIMIT,
}


@dataclass
class ArmRenderer:
    """Orthographic side-view renderer.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        view_x: Visible world x range.
        view_y: Visible world y range.
        floor_y: World height of the floor slab centre.
        floor_thickness: Slab thickness in world units.
        object_size: Cube edge length in world units.
        tip_offset: Finger length in world units.
    """

    width: int = DEFAULT_RENDER_WIDTH
    height: int = DEFAULT_RENDER_HEIGHT
    view_x: Tuple[float, float] = (-12.0, 12.0)
    view_y: Tuple[float, float] = (-3.0, 9.0)
    floor_y: float = -2.1
    floor_thickness: float = 0.2
    object_size: float = 0.8
    tip_offset: float = 1.8

    @classmethod
    def from_config(
        cls,
        cfg: ArmSimConfig,
        width: int = DEFAULT_RENDER_WIDTH,
        height: int = DEFAULT_RENDER_HEIGHT,
    ) -> "ArmRenderer":
        """Build a renderer whose floor and cube sizes match *cfg*."""
        return cls(
            width=width,
            height=height,
            floor_y=cfg.floor.floor_y,
            floor_thickness=cfg.floor.thickness,
            object_size=cfg.object_size,
            tip_offset=cfg.links.gripper_tip_offset,
        )

    # ------------------------------------------------------------------
    # Projection helpers
    # ------------------------------------------------------------------

    @property
    def _pixels_per_unit(self) -> float:
        return self.width / (self.view_x[1] - self.view_x[0])

    def world_to_pixel(self, pos: np.ndarray) -> Tuple[float, float]:
        """Map a world position onto (column, row) canvas coordinates."""
        px = (pos[0] - self.view_x[0]) / (self.view_x[1] - self.view_x[0]) * self.width
        py = (1.0 - (pos[1] - self.view_y[0]) / (self.view_y[1] - self.view_y[0])) * self.height
        return float(px), float(py)

    def _grid(self) -> Tuple[np.ndarray, np.ndarray]:
        rr, cc = np.mgrid[: self.height, : self.width]
        return rr.astype(np.float64), cc.astype(np.float64)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _draw_segment(
        self,
        canvas: np.ndarray,
        start: np.ndarray,
        end: np.ndarray,
        colour: Tuple[int, int, int],
        thickness: float,
    ) -> None:
        """Draw a thick line between two world points.

        Args:
            canvas: Mutable (H, W, 3) uint8 array.
            start: World start point.
            end: World end point.
            colour: RGB colour tuple.
            thickness: Line width in world units.
        """
        rr, cc = self._grid()
        x0, y0 = self.world_to_pixel(start)
        x1, y1 = self.world_to_pixel(end)
        dx, dy = x1 - x0, y1 - y0
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            t = np.zeros_like(rr)
        else:
            t = np.clip(((cc - x0) * dx + (rr - y0) * dy) / length_sq, 0.0, 1.0)
        dist_sq = (cc - (x0 + t * dx)) ** 2 + (rr - (y0 + t * dy)) ** 2
        half = thickness * self._pixels_per_unit / 2
        canvas[dist_sq <= half * half] = colour

    def _draw_circle(
        self, canvas: np.ndarray, pos: np.ndarray, colour: Tuple[int, int, int], radius: float
    ) -> None:
        rr, cc = self._grid()
        cx, cy = self.world_to_pixel(pos)
        r = radius * self._pixels_per_unit
        canvas[(rr - cy) ** 2 + (cc - cx) ** 2 <= r * r] = colour

    def _draw_box(
        self,
        canvas: np.ndarray,
        centre: np.ndarray,
        size: Tuple[float, float],
        colour: Tuple[int, int, int],
    ) -> None:
        left, top = self.world_to_pixel(
            np.array([centre[0] - size[0] / 2, centre[1] + size[1] / 2])
        )
        right, bottom = self.world_to_pixel(
            np.array([centre[0] + size[0] / 2, centre[1] - size[1] / 2])
        )
        r0, r1 = max(int(round(top)), 0), min(int(round(bottom)), self.height)
        c0, c1 = max(int(round(left)), 0), min(int(round(right)), self.width)
        if r0 < r1 and c0 < c1:
            canvas[r0:r1, c0:c1] = colour

    # ------------------------------------------------------------------
    # Scene
    # ------------------------------------------------------------------

    def _draw_floor(self, canvas: np.ndarray) -> None:
        span = self.view_x[1] - self.view_x[0]
        centre = np.array([(self.view_x[0] + self.view_x[1]) / 2, self.floor_y])
        self._draw_box(canvas, centre, (span, self.floor_thickness), COLOR_FLOOR)

    def _draw_arm(self, canvas: np.ndarray, frame: FrameSnapshot) -> None:
        pose = frame.pose
        base = translation_of(pose.base_xform)
        lower_pivot = translation_of(pose.lower_pivot_xform)
        upper_pivot = translation_of(pose.upper_pivot_xform)
        wrist = translation_of(pose.gripper_xform)

        self._draw_box(canvas, base + np.array([0.0, 0.1, 0.0]), (5.0, 0.2), COLOR_BASE)
        self._draw_box(canvas, base + np.array([0.0, 0.6, 0.0]), (3.5, 0.8), COLOR_BASE)
        self._draw_segment(canvas, lower_pivot, upper_pivot, COLOR_ARM, 0.7)
        self._draw_segment(canvas, upper_pivot, wrist, COLOR_ARM, 0.5)
        self._draw_gripper(canvas, frame)
        self._draw_circle(canvas, lower_pivot, _FEEDBACK_COLORS[frame.feedback[LOWER_ARM]], 0.5)
        self._draw_circle(canvas, upper_pivot, _FEEDBACK_COLORS[frame.feedback[UPPER_ARM]], 0.5)

    def _draw_gripper(self, canvas: np.ndarray, frame: FrameSnapshot) -> None:
        wrist_m = frame.pose.wrist_xform
        separation = max(frame.obj.gripper_gap, 0.05)
        self._draw_segment(
            canvas,
            translation_of(wrist_m @ translate(-0.6, -0.2, 0.0)),
            translation_of(wrist_m @ translate(0.6, -0.2, 0.0)),
            COLOR_GRIPPER,
            0.4,
        )
        for side in (-1.0, 1.0):
            x = side * (0.4 + separation)
            top = translation_of(wrist_m @ translate(x, -0.45, 0.0))
            tip = translation_of(wrist_m @ translate(x, -self.tip_offset - 0.15, 0.0))
            self._draw_segment(canvas, top, tip, COLOR_BASE, 0.2)

    def render(self, frame: FrameSnapshot) -> np.ndarray:
        """Render one frame.

        Args:
            frame: Snapshot returned by ``ArmController.tick``.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        canvas[:] = COLOR_BACKGROUND
        self._draw_floor(canvas)
        self._draw_arm(canvas, frame)
        size = self.object_size
        self._draw_box(canvas, frame.object_world, (size, size), COLOR_OBJECT)
        return canvas
