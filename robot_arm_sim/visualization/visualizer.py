"""
Real-time visualizer for the arm simulation.

Provides a Pygame window that renders live frames from ``ArmRenderer`` and
overlays telemetry: the status message, every joint angle tinted with its
limit feedback, the tip height and the automation step.

Classes:
    SimVisualizer: Live rendering with a HUD overlay.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from robot_arm_sim.control.controller import FrameSnapshot
from robot_arm_sim.utils.constants import (
    COLOR_LIMIT,
    COLOR_NEAR,
    COLOR_TEXT,
    DEFAULT_FPS,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    JOINT_NAMES,
    LimitState,
)
from robot_arm_sim.visualization.status_text import format_status, status_colour

_FEEDBACK_TEXT_COLORS = {
    LimitState.NORMAL: COLOR_TEXT,
    LimitState.NEAR: COLOR_NEAR,
    LimitState.LIMIT: COLOR_LIMIT,
}


@dataclass
class SimVisualizer:
    """Pygame-based visualizer for the arm.

    Call ``render_frame`` each tick with the rendered image and the frame
    snapshot; the visualizer blits the image and draws the HUD.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        window_title: Caption displayed in the title bar.
    """

    width: int = DEFAULT_RENDER_WIDTH
    height: int = DEFAULT_RENDER_HEIGHT
    fps: int = DEFAULT_FPS
    window_title: str = "Robot Arm Pick & Place"
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None
    _font: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window and clock.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        pygame.init()
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 14)

    def close(self) -> None:
        """Destroy the Pygame window and quit Pygame."""
        if self._screen is None:
            return
        import pygame

        pygame.quit()
        self._screen = None

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def _image_to_surface(self, image: np.ndarray) -> Any:
        """Convert an (H, W, 3) uint8 NumPy image to a scaled Pygame surface."""
        import pygame

        surface = pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))
        return pygame.transform.scale(surface, (self.width, self.height))

    def _draw_hud_text(self, text: str, y_offset: int, colour: Tuple[int, int, int]) -> None:
        rendered = self._font.render(text, True, colour)
        self._screen.blit(rendered, (8, y_offset))

    def _draw_hud(self, frame: FrameSnapshot) -> None:
        """Draw the status line, joint readouts and automation state.

        Args:
            frame: Snapshot for the current tick.
        """
        self._draw_hud_text(format_status(frame.status), 4, status_colour(frame.status))
        for i, (name, angle, state) in enumerate(zip(JOINT_NAMES, frame.joints, frame.feedback)):
            colour = _FEEDBACK_TEXT_COLORS[state]
            self._draw_hud_text(f"{name:>5}: {angle:7.1f} deg", 24 + 16 * i, colour)
        self._draw_hud_text(f"tip y: {frame.tip_height:6.2f}", 92, COLOR_TEXT)
        mode = "auto" if frame.automation.active else "manual"
        self._draw_hud_text(f"{mode} | step {frame.automation.step}", 108, COLOR_TEXT)

    def render_frame(self, image: np.ndarray, frame: FrameSnapshot) -> None:
        """Blit one frame to the window with HUD overlay.

        Event handling is left to the caller (see ``KeyboardTeleop``).

        Args:
            image: (H, W, 3) uint8 RGB image.
            frame: Snapshot the image was rendered from.
        """
        if self._screen is None:
            self.init_display()
        self._screen.blit(self._image_to_surface(image), (0, 0))
        self._draw_hud(frame)
        self._flip_display()

    def _flip_display(self) -> None:
        """Update the Pygame display and tick the clock."""
        import pygame

        pygame.display.flip()
        if self._clock is not None:
            self._clock.tick(self.fps)
