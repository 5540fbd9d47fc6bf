"""
Rendering and status display.

Provides a NumPy side-view renderer, the status-code to text mapping, and
a Pygame-based live visualizer with a telemetry HUD.
"""
