"""
Keyboard teleoperation of the arm.

Translates key presses into ``ArmController`` requests:

    a / d   base     -step / +step
    w / s   lower    +step / -step
    i / k   upper    +step / -step
    j / l   wrist    -step / +step
    enter   grab or release
    space   start / pause automation
    r       reset
    q, esc  quit

Joint and grab keys are ignored while automation is running; space and r
always work.  When Pygame is available key-down events are captured in real
time, otherwise single characters are read from the terminal.

Classes:
    KeyboardTeleop: Maps keyboard input to controller requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from robot_arm_sim.control.controller import ArmController, InputSource
from robot_arm_sim.control.manual import JointUpdate
from robot_arm_sim.utils.constants import BASE, LOWER_ARM, UPPER_ARM, WRIST

logger = logging.getLogger(__name__)

QUIT_KEYS = ("q", "escape")
GRAB_KEYS = ("enter", "return", "\n", "\r")
AUTOMATION_KEYS = (" ", "space")
RESET_KEYS = ("r",)


def _default_joint_keys() -> Dict[str, Tuple[int, float]]:
    return {
        "a": (BASE, -1.0),
        "d": (BASE, 1.0),
        "w": (LOWER_ARM, 1.0),
        "s": (LOWER_ARM, -1.0),
        "i": (UPPER_ARM, 1.0),
        "k": (UPPER_ARM, -1.0),
        "j": (WRIST, -1.0),
        "l": (WRIST, 1.0),
    }


@dataclass
class KeyboardTeleop:
    """Maps key presses to arm requests.

    Attributes:
        controller: The controller receiving the requests.
        step: Degrees per joint key press; the config's nudge step when None.
        joint_keys: Key -> (joint index, direction).
        last_update: Result of the most recent joint request.
    """

    controller: ArmController
    step: Optional[float] = None
    joint_keys: Dict[str, Tuple[int, float]] = field(default_factory=_default_joint_keys)
    last_update: Optional[JointUpdate] = None

    def __post_init__(self) -> None:
        if self.step is None:
            self.step = self.controller.cfg.nudge_step

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Apply a single key press.

        Args:
            key: Key name (``'a'``, ``'space'``, ``'enter'``...) or character.

        Returns:
            *False* if the key requests quitting; *True* otherwise.
        """
        name = key.lower()
        if name in QUIT_KEYS:
            return False
        if name in RESET_KEYS:
            self.controller.request_reset()
        elif name in AUTOMATION_KEYS:
            self.controller.request_automation_toggle()
        elif not self.controller.manual.controls_enabled:
            logger.debug("Key %r ignored while automation is active", name)
        elif name in GRAB_KEYS:
            self.controller.request_grab_toggle()
        elif name in self.joint_keys:
            index, direction = self.joint_keys[name]
            self.last_update = self.controller.nudge_joint(
                index, direction * self.step, source=InputSource.KEYBOARD
            )
        return True

    def process_terminal_input(self, line: str) -> bool:
        """Apply every character of a line read from stdin.

        An empty line counts as a single enter press.

        Args:
            line: Text read from the terminal, without the trailing newline.

        Returns:
            *False* if a quit character was received; *True* otherwise.
        """
        for char in line or "\n":
            if not self.handle_key(char):
                return False
        return True

    def process_pygame_events(self) -> bool:
        """Pump Pygame events and apply every key-down.

        Returns:
            *False* if a QUIT event or quit key was received; *True* otherwise.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError(
                "Pygame required for real-time teleop: pip install pygame"
            ) from exc
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and not self.handle_key(pygame.key.name(event.key)):
                return False
        return True
