"""
Robot Arm Pick-and-Place Simulation.

A four-joint arm (base yaw, lower-arm pitch, upper-arm pitch, wrist roll)
that picks up and places a cube under manual or scripted control.  The core
is a forward-kinematics chain, a floor-collision safety gate, joint-limit
feedback, proximity-gated grasping, and a seven-step automation sequencer;
rendering and input devices are thin adapters around it.

Modules:
    configs: Dataclass configuration and named presets.
    robots: Kinematics, joint limits, floor safety and grasping.
    control: Manual control, automation and the owning controller.
    envs: Gymnasium-compatible environment wrapping the controller.
    teleop: Keyboard teleoperation.
    visualization: Side-view renderer, status text and Pygame window.
    utils: Shared constants and transform helpers.
"""

__version__ = "0.1.0"
