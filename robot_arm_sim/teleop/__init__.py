"""
Keyboard teleoperation of the simulated arm.
"""
