#!/usr/bin/env python3
"""
Main entry point for the robot arm pick-and-place simulation.

Runs the arm core in one of three modes: a headless scripted
pick-and-place cycle, terminal keyboard teleoperation, or a live Pygame
window with real-time keyboard control.

Usage examples::

    # Headless automation run, printing every status change
    python run_sim.py --mode auto

    # Terminal teleoperation (type keys, press enter)
    python run_sim.py --mode teleop

    # Live window with the free-wrist preset
    python run_sim.py --mode visualize --preset free_wrist
"""

from __future__ import annotations

import argparse
import logging

from robot_arm_sim.configs import ArmSimConfig, make_config, preset_names
from robot_arm_sim.control.controller import ArmController, FrameSnapshot
from robot_arm_sim.teleop.keyboard_teleop import KeyboardTeleop
from robot_arm_sim.utils.constants import JOINT_NAMES
from robot_arm_sim.visualization.renderer import ArmRenderer
from robot_arm_sim.visualization.status_text import format_status
from robot_arm_sim.visualization.visualizer import SimVisualizer

# ======================================================================
# Helpers
# ======================================================================


def _describe(frame: FrameSnapshot) -> str:
    """One-line summary of a frame for terminal output."""
    joints = " ".join(f"{n}={a:.1f}" for n, a in zip(JOINT_NAMES, frame.joints))
    carried = "carried" if frame.obj.carried else "resting"
    return f"[{frame.tick:5d}] {format_status(frame.status):<32} {joints} | object {carried}"


def _run_until_idle(controller: ArmController, max_ticks: int) -> FrameSnapshot:
    """Tick while automation is active, printing every status change.

    Args:
        controller: The arm core.
        max_ticks: Upper bound on ticks before giving up.

    Returns:
        The last frame produced.
    """
    frame = controller.snapshot()
    last_status = None
    for _ in range(max_ticks):
        if not controller.automation.active:
            break
        frame = controller.tick()
        if frame.status != last_status:
            print(_describe(frame))
            last_status = frame.status
    return frame


# ======================================================================
# Mode runners
# ======================================================================


def _run_auto(cfg: ArmSimConfig, args: argparse.Namespace) -> None:
    """Run one scripted pick-and-place cycle headlessly."""
    controller = ArmController(cfg)
    controller.request_automation_toggle()
    frame = _run_until_idle(controller, args.max_ticks)
    if controller.automation.active:
        step = frame.automation.step
        print(f"Automation still running after {args.max_ticks} ticks (step {step})")
    print(f"Final: {format_status(frame.status)}")


def _run_teleop(cfg: ArmSimConfig, args: argparse.Namespace) -> None:
    """Drive the arm from terminal input, one line at a time."""
    controller = ArmController(cfg)
    teleop = KeyboardTeleop(controller)
    print("Keys: a/d base, w/s lower, i/k upper, j/l wrist, <enter> grab,")
    print("      <space> automation, r reset, q quit.")
    print(_describe(controller.snapshot()))
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not teleop.process_terminal_input(line):
            break
        frame = _run_until_idle(controller, args.max_ticks)
        if not controller.automation.active:
            frame = controller.tick()
        print(_describe(frame))


def _run_visualize(cfg: ArmSimConfig, args: argparse.Namespace) -> None:
    """Open a Pygame window with real-time keyboard control."""
    controller = ArmController(cfg)
    teleop = KeyboardTeleop(controller)
    renderer = ArmRenderer.from_config(cfg, args.width, args.height)
    viz = SimVisualizer(width=args.width, height=args.height, fps=args.fps)
    viz.init_display()
    try:
        while teleop.process_pygame_events():
            frame = controller.tick()
            viz.render_frame(renderer.render(frame), frame)
    finally:
        viz.close()


# ======================================================================
# CLI
# ======================================================================


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Robot arm pick-and-place simulation")
    parser.add_argument("--mode", choices=["auto", "teleop", "visualize"], default="auto")
    parser.add_argument("--preset", choices=list(preset_names()), default="classic")
    parser.add_argument("--max-ticks", type=int, default=5000)
    parser.add_argument("--width", type=int, default=720)
    parser.add_argument("--height", type=int, default=480)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser.parse_args()


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "auto": _run_auto,
    "teleop": _run_teleop,
    "visualize": _run_visualize,
}


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    # Parse CLI arguments
    args = _parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Build the arm configuration from the selected preset
    cfg = make_config(args.preset)
    print(f"Preset: {cfg.name} | Mode: {args.mode}")
    print(
        f"Grasp radius={cfg.grasp_radius}, speed={cfg.automation_speed} deg/tick, "
        f"auto-level={cfg.auto_level_gripper}"
    )
    print("-" * 60)

    # Dispatch to the selected mode runner
    runner = _MODE_DISPATCH[args.mode]
    runner(cfg, args)
