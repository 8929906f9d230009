"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object the UI interacts with during a run.
It holds the fully materialized Step list a generator returned and an
index into it, and exposes a clean play/pause/next/prev/speed API.

State machine:
    IDLE     →  load()    →  PAUSED
    PAUSED   →  play()    →  PLAYING
    PLAYING  →  pause()   →  PAUSED
    any      →  (last step shown)   →  FINISHED
    FINISHED →  rewind() / prev / goto  →  PAUSED
    any      →  reset()   →  IDLE

Playback speed is a multiplier on each Step's own timing.duration, so
a step the generator marks as long stays on screen longer at every
speed.

Thread safety:
  This class is NOT thread-safe.  Callers drive it from a single thread
  (the web API keeps one Stepper per session and Flask serves a
  session's requests one at a time).
"""

import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from algorithms.step import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (multiplier on each step's duration)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, float] = {
    "slow":   2.0,    # teaching mode
    "medium": 1.0,
    "fast":   0.5,    # demo mode
    "turbo":  0.2,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded Step list.
        current_idx : Index into `steps` that is currently displayed (-1 when idle).
        speed       : Multiplier applied to step durations during auto-play.
        on_step     : Optional callback(Step) fired every time current step changes.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None,
                 speed: str = "medium"):
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed_name:  str          = speed if speed in SPEED_PRESETS else "medium"
        self.speed:       float        = SPEED_PRESETS[self.speed_name]
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        # for auto-play timing
        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a fresh Step list and show step 0."""
        self.steps       = list(steps)
        self.current_idx = -1
        if not self.steps:
            self.state = StepperState.IDLE
            return
        self.state = StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE; caller must call load() again."""
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        if not self.steps:
            return False
        target = self.current_idx + 1
        if target >= len(self.steps):
            self.state = StepperState.FINISHED
            return False
        self._goto(target)
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index.  Out-of-range leaves the position alone."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        if not self.steps:
            return
        self._goto(0)

    def jump_to_end(self) -> None:
        """Jump to the final (terminal) step."""
        if not self.steps:
            return
        self._goto(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and the current
        step has been on screen for its scaled duration, advances one
        step.  Returns True if a step was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick >= self.current_delay():
            self._last_tick = now
            return self.next_step()
        return False

    def current_delay(self) -> float:
        """Seconds the current step should stay on screen at this speed."""
        step = self.current_step
        duration_ms = step.timing.duration + step.timing.delay if step else 1000
        return duration_ms / 1000.0 * self.speed

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> bool:
        """Select a named preset.  Unknown names are ignored and return False."""
        if preset not in SPEED_PRESETS:
            return False
        self.speed_name = preset
        self.speed      = SPEED_PRESETS[preset]
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    def snapshot(self) -> Dict[str, object]:
        """Small JSON-ready status record for polling clients."""
        return {
            "state":       self.state.value,
            "currentStep": self.current_idx,
            "totalSteps":  self.total_steps,
            "speed":       self.speed_name,
            "isFinished":  self.is_finished,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if idx == len(self.steps) - 1:
            self.state = StepperState.FINISHED
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        self._notify(self.steps[idx])

    def _notify(self, step: Step) -> None:
        if self.on_step:
            self.on_step(step)
