"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, compare, animation_kind
"""

from engine.stepper   import Stepper, StepperState, SPEED_PRESETS
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare
from engine.animation import ANIMATION_KINDS, animation_kind

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "ANIMATION_KINDS",
    "animation_kind",
]
