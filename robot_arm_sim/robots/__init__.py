"""
Virtual robot arm kinematics, limits, floor safety and grasping.

Provides a simulated four-joint arm (base yaw, lower/upper pitch, wrist
roll) with forward kinematics, joint-limit enforcement, a floor-collision
gate and a single graspable cube.
"""
