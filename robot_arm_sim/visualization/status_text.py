"""
Display text and colours for core status codes.

The arm core reports ``StatusCode`` values; this module is the only place
that turns them into the strings shown in the HUD or printed by the CLI.
"""

from __future__ import annotations

from typing import Dict, Tuple

from robot_arm_sim.control.status import Status, StatusCode
from robot_arm_sim.utils.constants import (
    COLOR_AUTO,
    COLOR_LIMIT,
    COLOR_SUCCESS,
    COLOR_TEXT,
)

STATUS_MESSAGES: Dict[StatusCode, str] = {
    StatusCode.READY: "Ready",
    StatusCode.RESET: "System Reset: Ready",
    StatusCode.MANUAL_SLIDER: "Manual Control (Slider)",
    StatusCode.MANUAL_KEYBOARD: "Manual Control (Keyboard)",
    StatusCode.OBJECT_PICKED: "Object Picked Up!",
    StatusCode.OBJECT_DROPPED: "Object Dropped",
    StatusCode.TOO_FAR: "Too far! Move closer ({detail:.1f})",
    StatusCode.AUTO_ALIGNING: "Auto: Aligning Base...",
    StatusCode.AUTO_REACHING: "Auto: Reaching for Object...",
    StatusCode.AUTO_GRABBING: "Auto: Grabbing Object...",
    StatusCode.AUTO_LIFTING: "Auto: Lifting...",
    StatusCode.AUTO_MOVING_TO_DROP: "Auto: Moving to Drop...",
    StatusCode.AUTO_POSITIONING: "Auto: Positioning for Drop...",
    StatusCode.AUTO_RELEASING: "Auto: Releasing Object...",
    StatusCode.TASK_COMPLETE: "Task Complete!",
    StatusCode.AUTO_PAUSED: "Automation Paused",
    StatusCode.AUTO_ABORTED_OBJECT_LOST: "Automation Stopped: object lost",
    StatusCode.AUTO_ABORTED_GRAB_FAILED: "Automation Stopped: grab failed ({detail:.1f})",
}

_AUTO_CODES = {
    StatusCode.AUTO_ALIGNING,
    StatusCode.AUTO_REACHING,
    StatusCode.AUTO_GRABBING,
    StatusCode.AUTO_LIFTING,
    StatusCode.AUTO_MOVING_TO_DROP,
    StatusCode.AUTO_POSITIONING,
    StatusCode.AUTO_RELEASING,
}
_SUCCESS_CODES = {StatusCode.OBJECT_PICKED, StatusCode.OBJECT_DROPPED, StatusCode.TASK_COMPLETE}
_ERROR_CODES = {
    StatusCode.TOO_FAR,
    StatusCode.AUTO_ABORTED_OBJECT_LOST,
    StatusCode.AUTO_ABORTED_GRAB_FAILED,
}


def format_status(status: Status) -> str:
    """Return the display string for *status*."""
    template = STATUS_MESSAGES[status.code]
    detail = status.detail if status.detail is not None else 0.0
    return template.format(detail=detail)


def status_colour(status: Status) -> Tuple[int, int, int]:
    if status.code in _AUTO_CODES:
        return COLOR_AUTO
    if status.code in _SUCCESS_CODES:
        return COLOR_SUCCESS
    if status.code in _ERROR_CODES:
        return COLOR_LIMIT
    return COLOR_TEXT
