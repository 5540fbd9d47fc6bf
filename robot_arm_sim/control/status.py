"""
Status codes emitted by the arm core.

The core never builds display strings; it reports a ``StatusCode`` (plus an
optional numeric detail such as a grasp distance) and the visualization
layer maps it to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StatusCode(Enum):
    READY = "ready"
    RESET = "reset"
    MANUAL_SLIDER = "manual_slider"
    MANUAL_KEYBOARD = "manual_keyboard"
    OBJECT_PICKED = "object_picked"
    OBJECT_DROPPED = "object_dropped"
    TOO_FAR = "too_far"
    AUTO_ALIGNING = "auto_aligning"
    AUTO_REACHING = "auto_reaching"
    AUTO_GRABBING = "auto_grabbing"
    AUTO_LIFTING = "auto_lifting"
    AUTO_MOVING_TO_DROP = "auto_moving_to_drop"
    AUTO_POSITIONING = "auto_positioning"
    AUTO_RELEASING = "auto_releasing"
    TASK_COMPLETE = "task_complete"
    AUTO_PAUSED = "auto_paused"
    AUTO_ABORTED_OBJECT_LOST = "auto_aborted_object_lost"
    AUTO_ABORTED_GRAB_FAILED = "auto_aborted_grab_failed"


@dataclass(frozen=True)
class Status:
    """A status code with an optional numeric detail."""

    code: StatusCode = StatusCode.READY
    detail: Optional[float] = None
