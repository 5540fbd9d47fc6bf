"""
Manual and scripted control of the simulated arm.

Modules:
    status: Status codes emitted by the core each tick.
    manual: Slider/keyboard joint updates.
    automation: The seven-step pick-and-place sequencer.
    controller: The single owner of all mutable arm state.
"""
